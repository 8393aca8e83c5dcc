"""
목적: 사용자 설정 저장소를 제공한다.
설명: 필드별 유지/설정/제거 연산으로 설정 레코드를 부분 갱신(없으면 생성)하고, 레코드가 없으면 기본 설정을 반환한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/integrations/kv/base/models.py, src/chat_store/core/chat/models/entities.py
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from chat_store.core.chat.models import UserSettings, utc_now
from chat_store.core.chat.utils import ChatItemMapper, format_timestamp, settings_key
from chat_store.integrations.kv import EntityStore
from chat_store.integrations.kv.base import (
    KEEP,
    REMOVE,
    FieldOp,
    FieldOps,
    KeepField,
    RemoveField,
    SetField,
)
from chat_store.shared.logging import LogContext, Logger, create_default_logger


class UserSettingsRepository:
    """사용자 설정 저장소 구현체."""

    def __init__(
        self,
        store: EntityStore,
        logger: Optional[Logger] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._logger = logger or create_default_logger("UserSettingsRepository")
        self._clock = clock
        self._mapper = ChatItemMapper()

    def get(self, user_id: str) -> UserSettings:
        """사용자 설정을 조회한다. 레코드가 없으면 기본 설정을 반환한다."""

        item = self._store.get(*settings_key(user_id))
        if item is None:
            return UserSettings.defaults(user_id)
        return self._mapper.settings_from_item(item)

    def update(self, user_id: str, changes: Mapping[str, FieldOp]) -> UserSettings:
        """설정을 부분 갱신한다.

        Args:
            user_id: 사용자 식별자.
            changes: 설정 필드 이름 → KeepField/SetField/RemoveField.

        Raises:
            ValueError: 알 수 없는 필드이거나 값이 설정 모델 검증에 실패할 때.
        """

        allowed = UserSettings.mutable_fields()
        unknown = sorted(set(changes) - allowed)
        if unknown:
            raise ValueError(f"알 수 없는 설정 필드입니다: {', '.join(unknown)}")

        field_ops: Dict[str, FieldOp] = {}
        for name, op in changes.items():
            if isinstance(op, SetField):
                value = self._validate_value(user_id, name, op.value)
                field_ops[name] = REMOVE if value is None else SetField(self._mapper.settings_value_to_item(value))
            elif isinstance(op, (KeepField, RemoveField)):
                field_ops[name] = op
            else:
                raise TypeError(f"지원하지 않는 필드 연산입니다: {name}={op!r}")
        field_ops["user_id"] = SetField(user_id)
        field_ops["updated_at"] = SetField(format_timestamp(self._clock()))

        updated = self._store.update(*settings_key(user_id), field_ops, upsert=True)
        self._logger.info(
            "사용자 설정 갱신",
            context=LogContext(user_id=user_id),
            fields=sorted(name for name, op in changes.items() if not isinstance(op, KeepField)),
        )
        return self._mapper.settings_from_item(updated)

    @staticmethod
    def changes_from_payload(payload: Mapping[str, Any]) -> FieldOps:
        """API 형태의 매핑(값/None)을 필드 연산으로 변환한다.

        키가 없으면 유지, None이면 제거, 그 밖의 값은 설정으로 해석한다.
        """

        ops: Dict[str, FieldOp] = {}
        for name in UserSettings.mutable_fields():
            if name not in payload:
                ops[name] = KEEP
            elif payload[name] is None:
                ops[name] = REMOVE
            else:
                ops[name] = SetField(payload[name])
        unknown = set(payload) - UserSettings.mutable_fields()
        for name in unknown:
            ops[name] = SetField(payload[name]) if payload[name] is not None else REMOVE
        return ops

    def _validate_value(self, user_id: str, name: str, value: Any) -> Any:
        validated = UserSettings.model_validate({"user_id": user_id, name: value})
        return getattr(validated, name)
