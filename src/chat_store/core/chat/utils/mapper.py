"""
목적: 대화 저장소 아이템 매퍼를 제공한다.
설명: 도메인 모델과 단일 테이블 아이템(dict) 간 변환 및 타입 파싱을 담당한다.
디자인 패턴: 매퍼 패턴
참조: src/chat_store/core/chat/utils/keys.py, src/chat_store/shared/chat/repositories
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from pydantic import TypeAdapter

from chat_store.core.chat.models import (
    Chat,
    ChatRole,
    Feedback,
    FeedbackRating,
    Message,
    MessagePart,
    PublicShare,
    User,
    UserSettings,
)
from chat_store.core.chat.utils.keys import (
    chat_key,
    chat_owner_index,
    feedback_key,
    format_timestamp,
    message_key,
    parse_timestamp,
    settings_key,
    share_key,
    user_email_index,
    user_key,
)
from chat_store.integrations.kv.base.models import (
    GSI1_PK_ATTR,
    GSI1_SK_ATTR,
    Item,
    PK_ATTR,
    SK_ATTR,
)

_PARTS_ADAPTER = TypeAdapter(list[MessagePart])


class ChatItemMapper:
    """대화 저장소 도메인/아이템 매퍼."""

    def user_to_item(self, user: User) -> Item:
        pk, sk = user_key(user.id)
        gsi_pk, gsi_sk = user_email_index(user.email)
        return {
            PK_ATTR: pk,
            SK_ATTR: sk,
            GSI1_PK_ATTR: gsi_pk,
            GSI1_SK_ATTR: gsi_sk,
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "password_hash": user.password_hash,
            "created_at": format_timestamp(user.created_at),
            "updated_at": format_timestamp(user.updated_at),
        }

    def user_from_item(self, item: Mapping[str, Any]) -> User:
        return User(
            id=str(item["id"]),
            email=str(item["email"]),
            name=item.get("name"),
            password_hash=str(item.get("password_hash") or ""),
            created_at=self._parse_datetime(item.get("created_at")),
            updated_at=self._parse_datetime(item.get("updated_at")),
        )

    def settings_to_item(self, settings: UserSettings) -> Item:
        """설정 모델을 아이템으로 변환한다. None 필드는 기록하지 않는다."""

        pk, sk = settings_key(settings.user_id)
        item: Item = {PK_ATTR: pk, SK_ATTR: sk, "user_id": settings.user_id}
        for name in UserSettings.model_fields:
            if name == "user_id":
                continue
            value = getattr(settings, name)
            if value is not None:
                item[name] = self.settings_value_to_item(value)
        return item

    def settings_value_to_item(self, value: Any) -> Any:
        """설정 필드 값 1개를 저장 표현으로 변환한다."""

        if isinstance(value, datetime):
            return format_timestamp(value)
        if isinstance(value, Enum):
            return value.value
        return value

    def settings_from_item(self, item: Mapping[str, Any]) -> UserSettings:
        data = {
            name: item[name]
            for name in UserSettings.model_fields
            if name in item and item[name] is not None
        }
        for name in ("external_token_expiry", "updated_at"):
            if name in data:
                data[name] = self._parse_datetime(data[name])
        data["user_id"] = str(item.get("user_id") or "")
        return UserSettings.model_validate(data)

    def chat_to_item(self, chat: Chat) -> Item:
        pk, sk = chat_key(chat.id)
        gsi_pk, gsi_sk = chat_owner_index(chat.user_id, chat.created_at)
        item: Item = {
            PK_ATTR: pk,
            SK_ATTR: sk,
            GSI1_PK_ATTR: gsi_pk,
            GSI1_SK_ATTR: gsi_sk,
            "id": chat.id,
            "user_id": chat.user_id,
            "title": chat.title,
            "model_id": chat.model_id,
            "is_public": chat.is_public,
            "created_at": format_timestamp(chat.created_at),
            "updated_at": format_timestamp(chat.updated_at),
        }
        if chat.share_id is not None:
            item["share_id"] = chat.share_id
        return item

    def chat_from_item(self, item: Mapping[str, Any]) -> Chat:
        return Chat(
            id=str(item["id"]),
            user_id=str(item["user_id"]),
            title=str(item.get("title") or ""),
            model_id=str(item.get("model_id") or ""),
            is_public=bool(item.get("is_public", False)),
            share_id=item.get("share_id"),
            created_at=self._parse_datetime(item.get("created_at")),
            updated_at=self._parse_datetime(item.get("updated_at")),
        )

    def message_to_item(self, message: Message) -> Item:
        pk, sk = message_key(message.chat_id, message.created_at, message.id)
        item: Item = {
            PK_ATTR: pk,
            SK_ATTR: sk,
            "id": message.id,
            "chat_id": message.chat_id,
            "role": message.role.value,
            "content": message.content,
            "parts": _PARTS_ADAPTER.dump_python(message.parts, mode="json"),
            "created_at": format_timestamp(message.created_at),
        }
        if message.regenerated_from is not None:
            item["regenerated_from"] = message.regenerated_from
        return item

    def message_from_item(self, item: Mapping[str, Any]) -> Message:
        return Message(
            id=str(item["id"]),
            chat_id=str(item["chat_id"]),
            role=ChatRole(str(item.get("role") or ChatRole.USER.value)),
            content=str(item.get("content") or ""),
            parts=_PARTS_ADAPTER.validate_python(item.get("parts") or []),
            regenerated_from=item.get("regenerated_from"),
            created_at=self._parse_datetime(item.get("created_at")),
        )

    def share_to_item(self, share: PublicShare) -> Item:
        pk, sk = share_key(share.share_id)
        return {
            PK_ATTR: pk,
            SK_ATTR: sk,
            "share_id": share.share_id,
            "chat_id": share.chat_id,
            "user_id": share.user_id,
            "created_at": format_timestamp(share.created_at),
        }

    def share_from_item(self, item: Mapping[str, Any]) -> PublicShare:
        return PublicShare(
            share_id=str(item["share_id"]),
            chat_id=str(item["chat_id"]),
            user_id=str(item["user_id"]),
            created_at=self._parse_datetime(item.get("created_at")),
        )

    def feedback_to_item(self, feedback: Feedback) -> Item:
        pk, sk = feedback_key(feedback.chat_id, feedback.message_id)
        item: Item = {
            PK_ATTR: pk,
            SK_ATTR: sk,
            "chat_id": feedback.chat_id,
            "message_id": feedback.message_id,
            "user_id": feedback.user_id,
            "rating": feedback.rating.value,
            "created_at": format_timestamp(feedback.created_at),
        }
        if feedback.comment is not None:
            item["comment"] = feedback.comment
        return item

    def feedback_from_item(self, item: Mapping[str, Any]) -> Feedback:
        return Feedback(
            chat_id=str(item["chat_id"]),
            message_id=str(item["message_id"]),
            user_id=str(item["user_id"]),
            rating=FeedbackRating(str(item["rating"])),
            comment=item.get("comment"),
            created_at=self._parse_datetime(item.get("created_at")),
        )

    def _parse_datetime(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if not value:
            raise ValueError("타임스탬프 값이 비어 있습니다.")
        return parse_timestamp(str(value))
