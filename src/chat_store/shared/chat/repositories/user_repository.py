"""
목적: 사용자 계정 저장소를 제공한다.
설명: 식별자 조건부 기록과 이메일 인덱스(GSI1 USERS) 조회로 사용자를 생성/조회한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/integrations/kv/client.py, src/chat_store/core/chat/utils/keys.py
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from chat_store.core.chat.models import User, utc_now
from chat_store.core.chat.utils import ChatItemMapper, user_email_index, user_key
from chat_store.integrations.kv import EntityStore
from chat_store.integrations.kv.base import SortOrder
from chat_store.shared.exceptions import AlreadyExistsError
from chat_store.shared.logging import LogContext, Logger, create_default_logger


class UserRepository:
    """사용자 저장소 구현체.

    이메일 유일성은 생성 전 조회로 확인하는 최선 노력 보장이다.
    """

    def __init__(
        self,
        store: EntityStore,
        logger: Optional[Logger] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._logger = logger or create_default_logger("UserRepository")
        self._clock = clock
        self._mapper = ChatItemMapper()

    def create(
        self,
        user_id: str,
        email: str,
        password_hash: str,
        name: Optional[str] = None,
    ) -> User:
        """사용자를 생성한다.

        Raises:
            AlreadyExistsError: 식별자 또는 이메일이 이미 사용 중일 때.
        """

        if self.get_by_email(email) is not None:
            raise AlreadyExistsError("이미 사용 중인 이메일입니다.", email=email)
        now = self._clock()
        user = User(
            id=user_id,
            email=email,
            name=name,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self._store.put(self._mapper.user_to_item(user), unique_on_create=True)
        self._logger.info("사용자 생성", context=LogContext(user_id=user_id))
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        """식별자로 사용자를 조회한다."""

        item = self._store.get(*user_key(user_id))
        return self._mapper.user_from_item(item) if item is not None else None

    def get_by_email(self, email: str) -> Optional[User]:
        """이메일로 사용자를 조회한다."""

        gsi_pk, gsi_sk = user_email_index(email)
        items = self._store.query_index(gsi_pk, gsi_sk, order=SortOrder.ASC)
        for item in items:
            if item.get("email") == email:
                return self._mapper.user_from_item(item)
        return None
