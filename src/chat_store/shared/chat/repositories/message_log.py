"""
목적: 대화별 메시지 로그 저장소를 제공한다.
설명: MESSAGE#{created_at}#{id} 정렬 키로 메시지를 시간순 저장하고, 이후 메시지 삭제/내용 편집/전체 삭제를 수행한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/integrations/kv/client.py, src/chat_store/core/chat/utils/keys.py
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, List, Optional

from chat_store.core.chat.models import Message, MessageDraft, new_id, utc_now
from chat_store.core.chat.utils import (
    ChatItemMapper,
    chat_key,
    format_timestamp,
    message_prefix,
    parse_timestamp,
)
from chat_store.integrations.kv.base import PK_ATTR, SK_ATTR, Item, SetField, SortOrder
from chat_store.integrations.kv import EntityStore
from chat_store.shared.exceptions import NotFoundError
from chat_store.shared.logging import LogContext, Logger, create_default_logger


class MessageLogRepository:
    """메시지 로그 저장소 구현체.

    로그 순서는 정렬 키(타임스탬프, 메시지 식별자)의 사전식 순서와 같다.
    """

    def __init__(
        self,
        store: EntityStore,
        logger: Optional[Logger] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._logger = logger or create_default_logger("MessageLogRepository")
        self._clock = clock
        self._mapper = ChatItemMapper()

    def append(self, chat_id: str, draft: MessageDraft) -> Message:
        """메시지를 로그 끝에 추가한다.

        created_at이 비어 있으면 저장 시각을 부여하되, 마지막 메시지보다 항상 뒤에 오도록
        필요하면 1마이크로초씩 밀어낸다. 지정된 created_at은 그대로 저장한다.
        추가 후 대화의 updated_at을 메시지 시각으로 갱신하며, 대화가 없으면 경고만 남긴다.
        """

        created_at = draft.created_at or self._next_timestamp(chat_id)
        message = Message(
            id=draft.id or new_id(),
            chat_id=chat_id,
            role=draft.role,
            content=draft.content,
            parts=draft.parts,
            regenerated_from=draft.regenerated_from,
            created_at=created_at,
        )
        self._store.put(self._mapper.message_to_item(message))
        self._touch_chat(chat_id, message.created_at)
        return message

    def list(self, chat_id: str) -> List[Message]:
        """대화의 메시지를 오래된 순으로 조회한다."""

        return [self._mapper.message_from_item(item) for item in self._items(chat_id)]

    def latest(self, chat_id: str) -> Optional[Message]:
        """가장 최근 메시지를 조회한다."""

        items = self._store.query_by_prefix(
            *message_prefix(chat_id),
            order=SortOrder.DESC,
            limit=1,
        )
        return self._mapper.message_from_item(items[0]) if items else None

    def delete_after(self, chat_id: str, message_id: str) -> int:
        """지정 메시지보다 뒤에 있는 메시지를 모두 삭제한다.

        Returns:
            삭제한 메시지 수. 메시지를 찾지 못하면 0이다.
        """

        items = self._items(chat_id)
        position = next(
            (index for index, item in enumerate(items) if item.get("id") == message_id),
            None,
        )
        if position is None:
            self._logger.info(
                "기준 메시지를 찾지 못해 삭제를 건너뜁니다.",
                context=LogContext(chat_id=chat_id),
                message_id=message_id,
            )
            return 0
        doomed = items[position + 1 :]
        for item in doomed:
            self._store.delete(item[PK_ATTR], item[SK_ATTR])
        if doomed:
            self._logger.info(
                f"이후 메시지 {len(doomed)}건 삭제",
                context=LogContext(chat_id=chat_id),
                message_id=message_id,
            )
        return len(doomed)

    def update_content(self, chat_id: str, message_id: str, content: str) -> Optional[Message]:
        """메시지 content만 교체한다. 메시지를 찾지 못하면 None을 반환한다."""

        target = next((item for item in self._items(chat_id) if item.get("id") == message_id), None)
        if target is None:
            self._logger.warning(
                "편집할 메시지를 찾지 못했습니다.",
                context=LogContext(chat_id=chat_id),
                message_id=message_id,
            )
            return None
        try:
            updated = self._store.update(
                target[PK_ATTR],
                target[SK_ATTR],
                {"content": SetField(content)},
            )
        except NotFoundError as error:
            self._logger.warning(
                "편집 중 메시지가 삭제되었습니다.",
                context=LogContext(chat_id=chat_id),
                message_id=message_id,
                error=error.to_dict(),
            )
            return None
        return self._mapper.message_from_item(updated)

    def delete_all(self, chat_id: str) -> int:
        """대화의 메시지를 모두 삭제하고 삭제 건수를 반환한다. 빈 로그도 허용한다."""

        items = self._items(chat_id)
        for item in items:
            self._store.delete(item[PK_ATTR], item[SK_ATTR])
        return len(items)

    def _items(self, chat_id: str) -> List[Item]:
        return self._store.query_by_prefix(*message_prefix(chat_id))

    def _next_timestamp(self, chat_id: str) -> datetime:
        now = parse_timestamp(format_timestamp(self._clock()))
        latest = self.latest(chat_id)
        if latest is not None and latest.created_at >= now:
            return latest.created_at + timedelta(microseconds=1)
        return now

    def _touch_chat(self, chat_id: str, at: datetime) -> None:
        pk, sk = chat_key(chat_id)
        try:
            self._store.update(pk, sk, {"updated_at": SetField(format_timestamp(at))})
        except NotFoundError as error:
            self._logger.warning(
                "메시지를 저장했지만 대화가 없어 갱신 시각을 기록하지 못했습니다.",
                context=LogContext(chat_id=chat_id),
                error=error.to_dict(),
            )
