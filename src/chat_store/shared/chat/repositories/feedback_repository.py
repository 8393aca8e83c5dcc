"""
목적: 메시지 피드백 저장소를 제공한다.
설명: 대화 파티션 아래 FEEDBACK# 정렬 키로 메시지별 평가를 저장/조회/삭제한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/integrations/kv/client.py, src/chat_store/core/chat/utils/mapper.py
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from chat_store.core.chat.models import Feedback, FeedbackRating, utc_now
from chat_store.core.chat.utils import ChatItemMapper, feedback_key, feedback_prefix
from chat_store.integrations.kv import EntityStore
from chat_store.shared.logging import Logger, create_default_logger


class FeedbackRepository:
    """피드백 저장소 구현체."""

    def __init__(
        self,
        store: EntityStore,
        logger: Optional[Logger] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._logger = logger or create_default_logger("FeedbackRepository")
        self._clock = clock
        self._mapper = ChatItemMapper()

    def add(
        self,
        chat_id: str,
        message_id: str,
        user_id: str,
        rating: FeedbackRating | str,
        comment: Optional[str] = None,
    ) -> Feedback:
        """메시지 피드백을 기록한다. 같은 메시지의 기존 피드백은 덮어쓴다."""

        feedback = Feedback(
            chat_id=chat_id,
            message_id=message_id,
            user_id=user_id,
            rating=FeedbackRating(rating),
            comment=comment,
            created_at=self._clock(),
        )
        self._store.put(self._mapper.feedback_to_item(feedback))
        return feedback

    def get(self, chat_id: str, message_id: str) -> Optional[Feedback]:
        """메시지 피드백 1건을 조회한다."""

        item = self._store.get(*feedback_key(chat_id, message_id))
        return self._mapper.feedback_from_item(item) if item is not None else None

    def list(self, chat_id: str) -> List[Feedback]:
        """대화의 모든 피드백을 메시지 식별자 순으로 조회한다."""

        items = self._store.query_by_prefix(*feedback_prefix(chat_id))
        return [self._mapper.feedback_from_item(item) for item in items]

    def delete_all(self, chat_id: str) -> int:
        """대화의 모든 피드백을 삭제하고 삭제 건수를 반환한다."""

        items = self._store.query_by_prefix(*feedback_prefix(chat_id))
        for item in items:
            self._store.delete(*feedback_key(chat_id, str(item["message_id"])))
        return len(items)
