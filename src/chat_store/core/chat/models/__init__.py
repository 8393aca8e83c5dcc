"""
목적: 대화 도메인 모델 공개 API를 제공한다.
설명: 엔티티와 메시지 조각 타입, 시간 유틸을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/core/chat/models/entities.py
"""

from chat_store.core.chat.models.entities import (
    Chat,
    ChatRole,
    Feedback,
    FeedbackRating,
    Message,
    MessageDraft,
    MessagePart,
    PublicShare,
    TextPart,
    Theme,
    ToolCallPart,
    ToolResultPart,
    User,
    UserSettings,
    new_id,
    utc_now,
)

__all__ = [
    "Chat",
    "ChatRole",
    "Feedback",
    "FeedbackRating",
    "Message",
    "MessageDraft",
    "MessagePart",
    "PublicShare",
    "TextPart",
    "Theme",
    "ToolCallPart",
    "ToolResultPart",
    "User",
    "UserSettings",
    "new_id",
    "utc_now",
]
