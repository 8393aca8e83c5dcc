"""
목적: 대화(Chat) 저장소를 제공한다.
설명: 사용자별 보관 한도(생성 순 축출), 소유자 인덱스 목록 조회, 제목 변경, 연쇄 삭제와 고아 레코드 회수를 수행한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/shared/chat/repositories/message_log.py, src/chat_store/integrations/kv/client.py
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, List, Optional

from chat_store.core.chat.const import DEFAULT_LIST_LIMIT, MAX_CHATS, RETENTION_FETCH_LIMIT
from chat_store.core.chat.models import Chat, new_id, utc_now
from chat_store.core.chat.utils import (
    ChatItemMapper,
    chat_key,
    chat_owner_index,
    format_timestamp,
    parse_timestamp,
)
from chat_store.integrations.kv import EntityStore
from chat_store.integrations.kv.base import PK_ATTR, SK_ATTR, SetField, SortOrder
from chat_store.shared.chat.repositories.feedback_repository import FeedbackRepository
from chat_store.shared.chat.repositories.message_log import MessageLogRepository
from chat_store.shared.exceptions import ForbiddenError, NotFoundError
from chat_store.shared.logging import LogContext, Logger, create_default_logger


class ChatRepository:
    """대화 저장소 구현체.

    보관 한도는 최선 노력 보장이다. 같은 사용자의 create가 동시에 실행되면
    일시적으로 max_chats를 넘을 수 있으며, enforce_retention으로 다시 맞출 수 있다.
    """

    def __init__(
        self,
        store: EntityStore,
        messages: MessageLogRepository,
        feedback: FeedbackRepository,
        logger: Optional[Logger] = None,
        clock: Callable[[], datetime] = utc_now,
        max_chats: int = MAX_CHATS,
        retention_fetch_limit: int = RETENTION_FETCH_LIMIT,
        default_list_limit: int = DEFAULT_LIST_LIMIT,
    ) -> None:
        self._store = store
        self._messages = messages
        self._feedback = feedback
        self._logger = logger or create_default_logger("ChatRepository")
        self._clock = clock
        self._max_chats = max_chats
        self._retention_fetch_limit = retention_fetch_limit
        self._default_list_limit = default_list_limit
        self._mapper = ChatItemMapper()

    @property
    def max_chats(self) -> int:
        return self._max_chats

    def create(
        self,
        user_id: str,
        title: str,
        model_id: str,
        chat_id: Optional[str] = None,
    ) -> Chat:
        """새 대화를 생성한다.

        사용자의 대화가 max_chats 이상이면 가장 오래된 대화부터 연쇄 삭제해
        새 대화가 들어갈 자리를 만든 뒤 기록한다.
        created_at은 같은 사용자의 가장 최근 대화보다 항상 뒤에 오도록
        필요하면 1마이크로초 밀어낸다.

        Raises:
            AlreadyExistsError: chat_id가 이미 존재할 때.
        """

        self.enforce_retention(user_id, reserve=1)
        now = self._next_created_at(user_id)
        chat = Chat(
            id=chat_id or new_id(),
            user_id=user_id,
            title=title,
            model_id=model_id,
            created_at=now,
            updated_at=now,
        )
        self._store.put(self._mapper.chat_to_item(chat), unique_on_create=True)
        self._logger.info(
            "대화 생성",
            context=LogContext(user_id=user_id, chat_id=chat.id),
        )
        return chat

    def enforce_retention(self, user_id: str, reserve: int = 0) -> List[str]:
        """사용자의 대화 수를 max_chats - reserve 이하로 줄인다.

        Returns:
            축출한 대화 식별자 목록(오래된 순).
        """

        items = self._store.query_index(
            *chat_owner_index(user_id),
            order=SortOrder.DESC,
            limit=self._retention_fetch_limit,
        )
        excess = len(items) + reserve - self._max_chats
        if excess <= 0:
            return []
        oldest_first = sorted(items, key=lambda item: (str(item["created_at"]), str(item["id"])))
        evicted = [str(item["id"]) for item in oldest_first[:excess]]
        self._logger.info(
            f"보관 한도 초과로 대화 {len(evicted)}건 축출",
            context=LogContext(user_id=user_id),
            chat_ids=evicted,
        )
        for chat_id in evicted:
            self.delete(chat_id)
        return evicted

    def get(self, chat_id: str) -> Optional[Chat]:
        """대화 1건을 조회한다."""

        item = self._store.get(*chat_key(chat_id))
        return self._mapper.chat_from_item(item) if item is not None else None

    def get_owned(self, chat_id: str, user_id: str) -> Chat:
        """소유권을 확인하며 대화를 조회한다.

        Raises:
            NotFoundError: 대화가 없을 때.
            ForbiddenError: 다른 사용자의 대화일 때.
        """

        chat = self.get(chat_id)
        if chat is None:
            raise NotFoundError("대화를 찾을 수 없습니다.", chat_id=chat_id)
        if chat.user_id != user_id:
            raise ForbiddenError("대화에 접근할 권한이 없습니다.", chat_id=chat_id, user_id=user_id)
        return chat

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> List[Chat]:
        """사용자의 대화를 최신 생성 순으로 조회한다."""

        items = self._store.query_index(
            *chat_owner_index(user_id),
            order=SortOrder.DESC,
            limit=limit if limit is not None else self._default_list_limit,
        )
        return [self._mapper.chat_from_item(item) for item in items]

    def rename(self, chat_id: str, title: str) -> Chat:
        """대화 제목을 변경한다.

        Raises:
            NotFoundError: 대화가 없을 때.
        """

        updated = self._store.update(
            *chat_key(chat_id),
            {
                "title": SetField(title),
                "updated_at": SetField(format_timestamp(self._clock())),
            },
        )
        return self._mapper.chat_from_item(updated)

    def touch(self, chat_id: str, at: Optional[datetime] = None) -> Chat:
        """대화의 updated_at을 갱신한다."""

        updated = self._store.update(
            *chat_key(chat_id),
            {"updated_at": SetField(format_timestamp(at or self._clock()))},
        )
        return self._mapper.chat_from_item(updated)

    def delete(self, chat_id: str) -> int:
        """대화를 메시지 → 피드백 → 대화 레코드 순으로 삭제한다.

        중간에 실패하면 대화 레코드 없는 자식 레코드만 남는다(reclaim_orphans로 회수).

        Returns:
            삭제한 메시지 수.
        """

        deleted_messages = self._messages.delete_all(chat_id)
        deleted_feedback = self._feedback.delete_all(chat_id)
        self._store.delete(*chat_key(chat_id))
        self._logger.info(
            "대화 연쇄 삭제",
            context=LogContext(chat_id=chat_id),
            messages=deleted_messages,
            feedback=deleted_feedback,
        )
        return deleted_messages

    def reclaim_orphans(self, chat_id: str) -> int:
        """대화 레코드가 없을 때 파티션에 남은 자식 레코드를 삭제한다.

        Returns:
            삭제한 레코드 수. 대화가 살아 있으면 0이다.
        """

        if self.get(chat_id) is not None:
            return 0
        pk, _ = chat_key(chat_id)
        leftovers = self._store.query_by_prefix(pk, "")
        for item in leftovers:
            self._store.delete(item[PK_ATTR], item[SK_ATTR])
        if leftovers:
            self._logger.warning(
                f"고아 레코드 {len(leftovers)}건 회수",
                context=LogContext(chat_id=chat_id),
            )
        return len(leftovers)

    def _next_created_at(self, user_id: str) -> datetime:
        now = parse_timestamp(format_timestamp(self._clock()))
        newest = self._store.query_index(
            *chat_owner_index(user_id),
            order=SortOrder.DESC,
            limit=1,
        )
        if newest:
            newest_at = self._mapper.chat_from_item(newest[0]).created_at
            if newest_at >= now:
                return newest_at + timedelta(microseconds=1)
        return now
