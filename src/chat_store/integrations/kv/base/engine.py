"""
목적: 키-값 엔진 추상 인터페이스를 정의한다.
설명: 단일 테이블(PK/SK) 기반 CRUD, 접두사 조회, 보조 인덱스 조회를 위한 표준 메서드를 제공한다.
디자인 패턴: 전략 패턴
참조: src/chat_store/integrations/kv/base/models.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from chat_store.integrations.kv.base.models import FieldOps, Item, SortOrder


class BaseKeyValueEngine(ABC):
    """키-값 엔진 인터페이스.

    구현체는 단일 레코드 쓰기를 직렬화해야 하며, 여러 레코드에 걸친 원자성은 보장하지 않는다.
    반환하는 아이템은 호출자가 수정해도 저장 상태에 영향을 주지 않아야 한다.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """엔진 이름을 반환한다."""

    @abstractmethod
    def connect(self) -> None:
        """연결을 초기화한다."""

    @abstractmethod
    def close(self) -> None:
        """연결을 종료한다."""

    @abstractmethod
    def ensure_table(self) -> None:
        """테이블과 보조 인덱스가 없으면 생성한다."""

    @abstractmethod
    def put(self, item: Item, unique_on_create: bool = False) -> None:
        """아이템을 저장한다.

        unique_on_create가 참이고 같은 기본 키가 있으면 AlreadyExistsError를 발생시킨다.
        """

    @abstractmethod
    def get(self, pk: str, sk: str) -> Optional[Item]:
        """기본 키로 아이템을 조회한다."""

    @abstractmethod
    def query(
        self,
        pk: str,
        sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        """파티션 안에서 정렬 키 접두사로 조회한다."""

    @abstractmethod
    def query_index(
        self,
        gsi_pk: str,
        gsi_sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        """보조 인덱스에서 정렬 키 접두사로 조회한다.

        인덱스 정렬 키가 같으면 기본 키 순으로 정렬한다.
        """

    @abstractmethod
    def update(self, pk: str, sk: str, field_ops: FieldOps, upsert: bool = False) -> Item:
        """필드 연산을 적용하고 갱신된 아이템을 반환한다.

        레코드가 없고 upsert가 거짓이면 NotFoundError를 발생시킨다.
        """

    @abstractmethod
    def delete(self, pk: str, sk: str) -> None:
        """아이템을 삭제한다. 없는 키는 무시한다."""
