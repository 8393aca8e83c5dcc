"""
목적: 단일 테이블 키 스키마를 제공한다.
설명: 엔티티별 기본 키/보조 인덱스 키와 고정 폭 타임스탬프 문자열을 만드는 순수 함수를 제공한다.
디자인 패턴: 유틸리티 함수
참조: src/chat_store/core/chat/utils/mapper.py, src/chat_store/shared/chat/repositories

키 배치:
    USER#{user_id}  / PROFILE                      (GSI1: USERS / {email})
    USER#{user_id}  / SETTINGS
    CHAT#{chat_id}  / META                         (GSI1: USER#{user_id} / CHAT#{created_at})
    CHAT#{chat_id}  / MESSAGE#{created_at}#{message_id}
    CHAT#{chat_id}  / FEEDBACK#{message_id}
    PUBLIC#{share_id} / MAPPING
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import NamedTuple, Optional

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
_AFTER_YEAR_FORMAT = "-%m-%dT%H:%M:%S.%fZ"

USER_PREFIX = "USER#"
CHAT_PREFIX = "CHAT#"
PUBLIC_PREFIX = "PUBLIC#"
MESSAGE_PREFIX = "MESSAGE#"
FEEDBACK_PREFIX = "FEEDBACK#"
PROFILE_SK = "PROFILE"
SETTINGS_SK = "SETTINGS"
META_SK = "META"
MAPPING_SK = "MAPPING"
USERS_INDEX_PK = "USERS"


class KeyPair(NamedTuple):
    """파티션 키와 정렬 키(또는 정렬 키 접두사) 쌍."""

    pk: str
    sk: str


def _require(value: str, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name}는 비어 있지 않은 문자열이어야 합니다.")
    return value


def format_timestamp(value: datetime) -> str:
    """datetime을 UTC 고정 폭 문자열로 변환한다.

    연도는 4자리, 마이크로초는 6자리로 항상 채우므로 문자열 순서와 시간 순서가 같다.
    naive datetime은 UTC로 간주한다.
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    # %Y는 플랫폼에 따라 1000년 미만을 채우지 않는다.
    return f"{value.year:04d}" + value.strftime(_AFTER_YEAR_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """고정 폭 문자열(또는 ISO-8601 문자열)을 UTC datetime으로 변환한다."""

    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def user_key(user_id: str) -> KeyPair:
    return KeyPair(f"{USER_PREFIX}{_require(user_id, 'user_id')}", PROFILE_SK)


def user_email_index(email: str) -> KeyPair:
    return KeyPair(USERS_INDEX_PK, _require(email, "email"))


def settings_key(user_id: str) -> KeyPair:
    return KeyPair(f"{USER_PREFIX}{_require(user_id, 'user_id')}", SETTINGS_SK)


def chat_key(chat_id: str) -> KeyPair:
    return KeyPair(f"{CHAT_PREFIX}{_require(chat_id, 'chat_id')}", META_SK)


def chat_owner_index(user_id: str, created_at: Optional[datetime] = None) -> KeyPair:
    """사용자별 대화 목록 인덱스 키를 만든다.

    created_at을 생략하면 정렬 키 자리에 조회용 접두사(`CHAT#`)를 돌려준다.
    """

    sort_key = CHAT_PREFIX if created_at is None else f"{CHAT_PREFIX}{format_timestamp(created_at)}"
    return KeyPair(f"{USER_PREFIX}{_require(user_id, 'user_id')}", sort_key)


def message_key(chat_id: str, created_at: datetime, message_id: str) -> KeyPair:
    return KeyPair(
        f"{CHAT_PREFIX}{_require(chat_id, 'chat_id')}",
        f"{MESSAGE_PREFIX}{format_timestamp(created_at)}#{_require(message_id, 'message_id')}",
    )


def message_prefix(chat_id: str) -> KeyPair:
    return KeyPair(f"{CHAT_PREFIX}{_require(chat_id, 'chat_id')}", MESSAGE_PREFIX)


def feedback_key(chat_id: str, message_id: str) -> KeyPair:
    return KeyPair(
        f"{CHAT_PREFIX}{_require(chat_id, 'chat_id')}",
        f"{FEEDBACK_PREFIX}{_require(message_id, 'message_id')}",
    )


def feedback_prefix(chat_id: str) -> KeyPair:
    return KeyPair(f"{CHAT_PREFIX}{_require(chat_id, 'chat_id')}", FEEDBACK_PREFIX)


def share_key(share_id: str) -> KeyPair:
    return KeyPair(f"{PUBLIC_PREFIX}{_require(share_id, 'share_id')}", MAPPING_SK)
