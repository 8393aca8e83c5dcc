"""
목적: 대화 코어 상수 공개 API를 제공한다.
설명: 설정 상수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/core/chat/const/settings.py
"""

from chat_store.core.chat.const.settings import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_SQLITE_PATH,
    DEFAULT_TABLE_NAME,
    FORK_TITLE_SUFFIX,
    MAX_CHATS,
    RETENTION_FETCH_LIMIT,
    SHARE_ID_LENGTH,
)

__all__ = [
    "DEFAULT_TABLE_NAME",
    "DEFAULT_SQLITE_PATH",
    "MAX_CHATS",
    "RETENTION_FETCH_LIMIT",
    "DEFAULT_LIST_LIMIT",
    "SHARE_ID_LENGTH",
    "FORK_TITLE_SUFFIX",
]
