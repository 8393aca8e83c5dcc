"""
목적: 대화 코어 유틸 공개 API를 제공한다.
설명: 키 스키마 함수와 아이템 매퍼를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/core/chat/utils/keys.py, src/chat_store/core/chat/utils/mapper.py
"""

from chat_store.core.chat.utils.keys import (
    KeyPair,
    chat_key,
    chat_owner_index,
    feedback_key,
    feedback_prefix,
    format_timestamp,
    message_key,
    message_prefix,
    parse_timestamp,
    settings_key,
    share_key,
    user_email_index,
    user_key,
)
from chat_store.core.chat.utils.mapper import ChatItemMapper

__all__ = [
    "ChatItemMapper",
    "KeyPair",
    "chat_key",
    "chat_owner_index",
    "feedback_key",
    "feedback_prefix",
    "format_timestamp",
    "message_key",
    "message_prefix",
    "parse_timestamp",
    "settings_key",
    "share_key",
    "user_email_index",
    "user_key",
]
