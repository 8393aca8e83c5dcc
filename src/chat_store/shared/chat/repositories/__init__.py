"""
목적: 대화 저장소 리포지토리 공개 API를 제공한다.
설명: 메시지 로그/대화/공유·포크/설정/사용자/피드백 저장소를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/shared/chat/services/chat_store.py
"""

from chat_store.shared.chat.repositories.chat_repository import ChatRepository
from chat_store.shared.chat.repositories.feedback_repository import FeedbackRepository
from chat_store.shared.chat.repositories.message_log import MessageLogRepository
from chat_store.shared.chat.repositories.settings_repository import UserSettingsRepository
from chat_store.shared.chat.repositories.share_service import ChatShareService, generate_share_id
from chat_store.shared.chat.repositories.user_repository import UserRepository

__all__ = [
    "ChatRepository",
    "ChatShareService",
    "FeedbackRepository",
    "MessageLogRepository",
    "UserRepository",
    "UserSettingsRepository",
    "generate_share_id",
]
