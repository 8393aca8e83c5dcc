"""
목적: 키-값 저장소 계층에서 공통으로 사용하는 모델을 정의한다.
설명: 키 속성 이름, 정렬 방향, 필드 변경 연산(유지/설정/제거) 합 타입과 적용 함수를 제공한다.
디자인 패턴: 데이터 전송 객체(DTO), 대수적 데이터 타입
참조: src/chat_store/integrations/kv/base/engine.py, src/chat_store/integrations/kv/client.py
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Union

PK_ATTR = "PK"
SK_ATTR = "SK"
GSI1_PK_ATTR = "GSI1PK"
GSI1_SK_ATTR = "GSI1SK"
GSI1_INDEX_NAME = "GSI1"
KEY_ATTRIBUTES = frozenset({PK_ATTR, SK_ATTR, GSI1_PK_ATTR, GSI1_SK_ATTR})

Item = Dict[str, Any]


class SortOrder(str, Enum):
    """정렬 키 기준 조회 방향."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class KeepField:
    """필드를 그대로 둔다."""


@dataclass(frozen=True)
class SetField:
    """필드를 주어진 값으로 설정한다. None도 값으로 저장된다."""

    value: Any


@dataclass(frozen=True)
class RemoveField:
    """필드를 레코드에서 제거한다."""


FieldOp = Union[KeepField, SetField, RemoveField]
FieldOps = Mapping[str, FieldOp]

KEEP = KeepField()
REMOVE = RemoveField()


def item_key(item: Mapping[str, Any]) -> Tuple[str, str]:
    """아이템의 기본 키(PK, SK)를 검증 후 반환한다."""

    pk = item.get(PK_ATTR)
    sk = item.get(SK_ATTR)
    if not isinstance(pk, str) or not pk:
        raise ValueError(f"아이템에 {PK_ATTR} 문자열이 필요합니다.")
    if not isinstance(sk, str) or not sk:
        raise ValueError(f"아이템에 {SK_ATTR} 문자열이 필요합니다.")
    return pk, sk


def index_key(item: Mapping[str, Any]) -> Tuple[str, str] | None:
    """보조 인덱스 키를 반환한다. 둘 중 하나라도 없으면 None이다."""

    gsi_pk = item.get(GSI1_PK_ATTR)
    gsi_sk = item.get(GSI1_SK_ATTR)
    if gsi_pk is None or gsi_sk is None:
        return None
    return str(gsi_pk), str(gsi_sk)


def validate_field_ops(field_ops: FieldOps) -> None:
    """필드 변경 연산의 대상과 타입을 검증한다."""

    for name, op in field_ops.items():
        if name in KEY_ATTRIBUTES:
            raise ValueError(f"키 속성은 갱신할 수 없습니다: {name}")
        if not isinstance(op, (KeepField, SetField, RemoveField)):
            raise TypeError(f"지원하지 않는 필드 연산입니다: {name}={op!r}")


def apply_field_ops(item: Mapping[str, Any], field_ops: FieldOps) -> Item:
    """필드 변경 연산을 적용한 새 아이템을 반환한다."""

    updated = copy.deepcopy(dict(item))
    for name, op in field_ops.items():
        if isinstance(op, SetField):
            updated[name] = copy.deepcopy(op.value)
        elif isinstance(op, RemoveField):
            updated.pop(name, None)
    return updated


def has_changes(field_ops: FieldOps) -> bool:
    """실제로 적용될 연산이 하나라도 있는지 반환한다."""

    return any(not isinstance(op, KeepField) for op in field_ops.values())
