"""
목적: 대화 저장소 도메인 엔티티 모델을 정의한다.
설명: 사용자/설정/대화/메시지/공개 공유/피드백 엔티티와 역할·테마·평가 타입, 공통 시간 유틸을 Pydantic 기반으로 제공한다.
디자인 패턴: 엔티티 패턴
참조: src/chat_store/core/chat/utils/mapper.py, src/chat_store/shared/chat/repositories
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """UTC 기준 timezone-aware 현재 시각을 반환한다."""

    return datetime.now(timezone.utc)


def new_id() -> str:
    """엔티티 식별자를 생성한다."""

    return str(uuid4())


class ChatRole(str, Enum):
    """대화 메시지 역할 타입."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Theme(str, Enum):
    """UI 테마 설정 값."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class FeedbackRating(str, Enum):
    """메시지 피드백 평가 값."""

    UP = "up"
    DOWN = "down"


class TextPart(BaseModel):
    """텍스트 메시지 조각."""

    type: Literal["text"] = "text"
    text: str


class ToolCallPart(BaseModel):
    """도구 호출 메시지 조각."""

    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str
    tool_name: str
    args: Any = None


class ToolResultPart(BaseModel):
    """도구 실행 결과 메시지 조각."""

    type: Literal["tool-result"] = "tool-result"
    tool_call_id: str
    tool_name: str
    result: Any = None


MessagePart = Annotated[
    Union[TextPart, ToolCallPart, ToolResultPart],
    Field(discriminator="type"),
]


class User(BaseModel):
    """사용자 계정 엔티티. email은 전역에서 유일하다."""

    id: str
    email: str
    name: str | None = None
    password_hash: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class UserSettings(BaseModel):
    """사용자 설정 엔티티.

    모든 설정 필드는 선택 값이며, 지워진 필드는 None으로 표현된다.
    """

    model_config = ConfigDict(validate_assignment=True)

    user_id: str
    theme: Theme | None = None
    mcp_enabled: bool | None = None
    preferred_model_id: str | None = None
    external_access_token: str | None = None
    external_refresh_token: str | None = None
    external_token_expiry: datetime | None = None
    external_username: str | None = None
    external_user_id: str | None = None
    updated_at: datetime | None = None

    @classmethod
    def defaults(cls, user_id: str) -> "UserSettings":
        """저장된 설정이 없을 때 돌려줄 기본 설정을 생성한다."""

        return cls(user_id=user_id, theme=Theme.SYSTEM, mcp_enabled=False)

    @classmethod
    def mutable_fields(cls) -> frozenset[str]:
        """호출자가 변경할 수 있는 설정 필드 이름을 반환한다."""

        return frozenset(cls.model_fields) - {"user_id", "updated_at"}


class Chat(BaseModel):
    """대화 엔티티. 소유자(user_id)는 생성 후 바뀌지 않는다."""

    model_config = ConfigDict(protected_namespaces=())

    id: str = Field(default_factory=new_id)
    user_id: str
    title: str
    model_id: str
    is_public: bool = False
    share_id: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class MessageDraft(BaseModel):
    """추가 전 메시지 입력.

    id와 created_at을 비우면 저장 시점에 채워진다.
    """

    role: ChatRole
    content: str
    parts: list[MessagePart] = Field(default_factory=list)
    regenerated_from: str | None = None
    id: str | None = None
    created_at: datetime | None = None


class Message(BaseModel):
    """대화 메시지 엔티티. content 편집 외에는 변경되지 않는다."""

    id: str
    chat_id: str
    role: ChatRole
    content: str
    parts: list[MessagePart] = Field(default_factory=list)
    regenerated_from: str | None = None
    created_at: datetime


class PublicShare(BaseModel):
    """공개 공유 식별자와 대화의 매핑."""

    share_id: str
    chat_id: str
    user_id: str
    created_at: datetime = Field(default_factory=utc_now)


class Feedback(BaseModel):
    """메시지 단위 피드백. 메시지당 1건이며 다시 평가하면 덮어쓴다."""

    chat_id: str
    message_id: str
    user_id: str
    rating: FeedbackRating
    comment: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
