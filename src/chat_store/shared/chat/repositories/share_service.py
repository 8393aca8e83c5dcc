"""
목적: 대화 공개 공유와 포크 서비스를 제공한다.
설명: 추측 불가능한 공유 식별자로 대화를 공개하고, 공유 식별자로 대화를 조회하며, 대화를 새 소유자에게 깊은 복사한다.
디자인 패턴: 서비스 레이어
참조: src/chat_store/shared/chat/repositories/chat_repository.py, src/chat_store/shared/chat/repositories/message_log.py
"""

from __future__ import annotations

import copy
import secrets
from datetime import datetime
from typing import Callable, Optional

from chat_store.core.chat.const import FORK_TITLE_SUFFIX, SHARE_ID_LENGTH
from chat_store.core.chat.models import Chat, MessageDraft, PublicShare, utc_now
from chat_store.core.chat.utils import ChatItemMapper, chat_key, format_timestamp, share_key
from chat_store.integrations.kv import EntityStore
from chat_store.integrations.kv.base import SetField
from chat_store.shared.chat.repositories.chat_repository import ChatRepository
from chat_store.shared.chat.repositories.message_log import MessageLogRepository
from chat_store.shared.exceptions import NotFoundError
from chat_store.shared.logging import LogContext, Logger, create_default_logger


def generate_share_id() -> str:
    """URL에 안전한 12자 공유 식별자를 생성한다."""

    return secrets.token_urlsafe(SHARE_ID_LENGTH * 3 // 4)


class ChatShareService:
    """공개 공유/포크 서비스.

    소유권 확인은 호출자가 수행한다.
    """

    def __init__(
        self,
        store: EntityStore,
        chats: ChatRepository,
        messages: MessageLogRepository,
        logger: Optional[Logger] = None,
        clock: Callable[[], datetime] = utc_now,
        share_id_factory: Callable[[], str] = generate_share_id,
    ) -> None:
        self._store = store
        self._chats = chats
        self._messages = messages
        self._logger = logger or create_default_logger("ChatShareService")
        self._clock = clock
        self._share_id_factory = share_id_factory
        self._mapper = ChatItemMapper()

    def make_public(self, chat_id: str, user_id: str) -> str:
        """대화를 공개하고 공유 식별자를 반환한다.

        이미 공개된 대화면 기존 식별자를 반환하며, 매핑이 빠져 있으면 다시 기록한다.

        Raises:
            NotFoundError: 대화가 없을 때.
        """

        chat = self._chats.get(chat_id)
        if chat is None:
            raise NotFoundError("공개할 대화를 찾을 수 없습니다.", chat_id=chat_id)
        if chat.is_public and chat.share_id:
            if self.get_share(chat.share_id) is None:
                self._write_mapping(chat.share_id, chat_id, user_id)
            return chat.share_id

        share_id = self._share_id_factory()
        self._store.update(
            *chat_key(chat_id),
            {
                "is_public": SetField(True),
                "share_id": SetField(share_id),
                "updated_at": SetField(format_timestamp(self._clock())),
            },
        )
        self._write_mapping(share_id, chat_id, user_id)
        self._logger.info(
            "대화 공개 공유 생성",
            context=LogContext(user_id=user_id, chat_id=chat_id),
            share_id=share_id,
        )
        return share_id

    def get_share(self, share_id: str) -> Optional[PublicShare]:
        """공유 매핑을 조회한다."""

        item = self._store.get(*share_key(share_id))
        return self._mapper.share_from_item(item) if item is not None else None

    def resolve_share(self, share_id: str) -> Optional[Chat]:
        """공유 식별자로 대화를 조회한다. 매핑이나 대화가 없으면 None이다."""

        share = self.get_share(share_id)
        if share is None:
            return None
        return self._chats.get(share.chat_id)

    def fork(self, original_chat_id: str, new_owner_id: str) -> str:
        """대화를 새 소유자에게 복사하고 새 대화 식별자를 반환한다.

        원본 메시지를 먼저 읽은 뒤 새 대화를 만들기 때문에, 새 대화 생성 중 보관 한도로
        원본이 축출되더라도 복사본은 온전하다.

        Raises:
            NotFoundError: 원본 대화가 없을 때.
        """

        original = self._chats.get(original_chat_id)
        if original is None:
            raise NotFoundError("포크할 원본 대화를 찾을 수 없습니다.", chat_id=original_chat_id)
        history = self._messages.list(original_chat_id)

        forked = self._chats.create(
            user_id=new_owner_id,
            title=f"{original.title}{FORK_TITLE_SUFFIX}",
            model_id=original.model_id,
        )
        for message in history:
            self._messages.append(
                forked.id,
                MessageDraft(
                    role=message.role,
                    content=message.content,
                    parts=copy.deepcopy(message.parts),
                ),
            )
        self._logger.info(
            f"대화 포크 완료: 메시지 {len(history)}건",
            context=LogContext(user_id=new_owner_id, chat_id=forked.id),
            original_chat_id=original_chat_id,
        )
        return forked.id

    def _write_mapping(self, share_id: str, chat_id: str, user_id: str) -> None:
        share = PublicShare(
            share_id=share_id,
            chat_id=chat_id,
            user_id=user_id,
            created_at=self._clock(),
        )
        self._store.put(self._mapper.share_to_item(share), unique_on_create=True)
