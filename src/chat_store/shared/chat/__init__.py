"""
목적: 대화 저장소 공유 계층을 노출한다.
설명: 저장소와 조립 루트를 제공한다.
디자인 패턴: 퍼사드
참조: src/chat_store/shared/chat/repositories, src/chat_store/shared/chat/services
"""

from chat_store.shared.chat.repositories import (
    ChatRepository,
    ChatShareService,
    FeedbackRepository,
    MessageLogRepository,
    UserRepository,
    UserSettingsRepository,
)
from chat_store.shared.chat.services import ChatStore, build_chat_store

__all__ = [
    "ChatRepository",
    "ChatShareService",
    "ChatStore",
    "FeedbackRepository",
    "MessageLogRepository",
    "UserRepository",
    "UserSettingsRepository",
    "build_chat_store",
]
