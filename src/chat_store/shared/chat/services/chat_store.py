"""
목적: 대화 저장소 조립 루트를 제공한다.
설명: 하나의 EntityStore 위에 모든 저장소/서비스를 연결하고, 설정으로부터 엔진을 골라 테이블을 준비한다.
디자인 패턴: 컴포지션 루트 + 팩토리 함수
참조: src/chat_store/integrations/kv/factory.py, src/chat_store/shared/chat/repositories
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from chat_store.core.chat.models import utc_now
from chat_store.integrations.kv import EntityStore, build_engine
from chat_store.shared.chat.repositories import (
    ChatRepository,
    ChatShareService,
    FeedbackRepository,
    MessageLogRepository,
    UserRepository,
    UserSettingsRepository,
)
from chat_store.shared.config import StoreSettings
from chat_store.shared.logging import Logger, create_default_logger


class ChatStore:
    """대화 저장소 구성 요소 묶음."""

    def __init__(
        self,
        store: EntityStore,
        settings: Optional[StoreSettings] = None,
        logger: Optional[Logger] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.settings = settings or StoreSettings()
        self._logger = logger or create_default_logger("ChatStore")
        self.store = store
        self.messages = MessageLogRepository(store, logger=self._logger, clock=clock)
        self.feedback = FeedbackRepository(store, logger=self._logger, clock=clock)
        self.chats = ChatRepository(
            store,
            messages=self.messages,
            feedback=self.feedback,
            logger=self._logger,
            clock=clock,
            max_chats=self.settings.max_chats,
            retention_fetch_limit=self.settings.retention_fetch_limit,
            default_list_limit=self.settings.default_list_limit,
        )
        self.shares = ChatShareService(
            store,
            chats=self.chats,
            messages=self.messages,
            logger=self._logger,
            clock=clock,
        )
        self.user_settings = UserSettingsRepository(store, logger=self._logger, clock=clock)
        self.users = UserRepository(store, logger=self._logger, clock=clock)

    def close(self) -> None:
        """엔진 연결을 종료한다."""

        self.store.close()


def build_chat_store(
    settings: Optional[StoreSettings] = None,
    logger: Optional[Logger] = None,
    clock: Callable[[], datetime] = utc_now,
) -> ChatStore:
    """설정에 맞는 엔진으로 ChatStore를 만들고 테이블을 준비한다."""

    settings = settings or StoreSettings()
    logger = logger or create_default_logger("ChatStore")
    store = EntityStore(build_engine(settings, logger=logger), logger=logger)
    store.connect()
    store.ensure_table()
    logger.info(f"대화 저장소 준비 완료: backend={settings.backend.value}")
    return ChatStore(store, settings=settings, logger=logger, clock=clock)
