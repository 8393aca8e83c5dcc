"""
목적: Redis 키스페이스 유틸 모듈을 제공한다.
설명: 파티션 해시/정렬 집합/보조 인덱스 집합 키 생성과 사전식 범위 계산을 담당한다.
디자인 패턴: 유틸리티 클래스
참조: src/chat_store/integrations/kv/engines/redis/engine.py
"""

from __future__ import annotations

from typing import Tuple

_MEMBER_SEPARATOR = "\x00"


class RedisKeyspaceHelper:
    """Redis 키스페이스 도우미.

    파티션 하나는 아이템 본문 해시(`p`)와 정렬 키 사전식 집합(`ps`)으로,
    보조 인덱스 파티션 하나는 `g` 집합으로 표현한다.
    """

    def __init__(self, namespace: str) -> None:
        self._namespace = namespace

    def partition_key(self, pk: str) -> str:
        """파티션 아이템 해시 키를 생성한다."""

        return f"{self._namespace}:p:{pk}"

    def order_key(self, pk: str) -> str:
        """파티션 정렬 키 집합 키를 생성한다."""

        return f"{self._namespace}:ps:{pk}"

    def index_key(self, gsi_pk: str) -> str:
        """보조 인덱스 집합 키를 생성한다."""

        return f"{self._namespace}:g:{gsi_pk}"

    def index_member(self, gsi_sk: str, pk: str, sk: str) -> str:
        """인덱스 정렬 키 → 기본 키 순으로 정렬되는 집합 멤버를 생성한다."""

        return _MEMBER_SEPARATOR.join((gsi_sk, pk, sk))

    def parse_index_member(self, member: bytes | str) -> Tuple[str, str, str]:
        """인덱스 멤버를 (gsi_sk, pk, sk)로 분해한다."""

        text = member.decode("utf-8") if isinstance(member, bytes) else member
        gsi_sk, pk, sk = text.split(_MEMBER_SEPARATOR, 2)
        return gsi_sk, pk, sk

    def prefix_range(self, prefix: str) -> Tuple[bytes, bytes]:
        """ZRANGEBYLEX에 쓸 (min, max) 범위를 반환한다.

        UTF-8 바이트열에는 0xff가 나타나지 않으므로 접두사 뒤에 0xff를 붙여 상한으로 쓴다.
        """

        if not prefix:
            return b"-", b"+"
        encoded = prefix.encode("utf-8")
        return b"[" + encoded, b"[" + encoded + b"\xff"
