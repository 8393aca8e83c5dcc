"""
목적: 키-값 저장소 베이스 모듈 공개 API를 제공한다.
설명: 엔진 인터페이스와 공통 모델을 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/kv/base/engine.py, src/chat_store/integrations/kv/base/models.py
"""

from chat_store.integrations.kv.base.engine import BaseKeyValueEngine
from chat_store.integrations.kv.base.models import (
    GSI1_INDEX_NAME,
    GSI1_PK_ATTR,
    GSI1_SK_ATTR,
    KEEP,
    KEY_ATTRIBUTES,
    PK_ATTR,
    REMOVE,
    SK_ATTR,
    FieldOp,
    FieldOps,
    Item,
    KeepField,
    RemoveField,
    SetField,
    SortOrder,
    apply_field_ops,
    has_changes,
    index_key,
    item_key,
    validate_field_ops,
)

__all__ = [
    "BaseKeyValueEngine",
    "PK_ATTR",
    "SK_ATTR",
    "GSI1_PK_ATTR",
    "GSI1_SK_ATTR",
    "GSI1_INDEX_NAME",
    "KEY_ATTRIBUTES",
    "Item",
    "SortOrder",
    "KeepField",
    "SetField",
    "RemoveField",
    "FieldOp",
    "FieldOps",
    "KEEP",
    "REMOVE",
    "item_key",
    "index_key",
    "validate_field_ops",
    "apply_field_ops",
    "has_changes",
]
