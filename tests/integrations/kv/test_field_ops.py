"""
목적: 필드 변경 연산 합 타입과 적용 함수를 검증한다.
설명: 유지/설정/제거 의미, 키 속성 갱신 거부, 입력 불변성을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/chat_store/integrations/kv/base/models.py
"""

from __future__ import annotations

import pytest

from chat_store.integrations.kv.base import (
    KEEP,
    REMOVE,
    SetField,
    apply_field_ops,
    has_changes,
    validate_field_ops,
)


def test_apply_field_ops_semantics() -> None:
    """SetField(None)은 값으로, RemoveField는 삭제로 처리된다."""

    original = {"PK": "p", "SK": "s", "a": 1, "b": 2, "c": 3}

    updated = apply_field_ops(original, {"a": KEEP, "b": REMOVE, "c": SetField(None), "d": SetField([1])})

    assert updated == {"PK": "p", "SK": "s", "a": 1, "c": None, "d": [1]}
    assert original == {"PK": "p", "SK": "s", "a": 1, "b": 2, "c": 3}


def test_key_attributes_cannot_be_updated() -> None:
    """키 속성 변경은 ValueError다."""

    with pytest.raises(ValueError):
        validate_field_ops({"GSI1SK": SetField("x")})


def test_plain_values_are_not_field_ops() -> None:
    """연산 타입이 아닌 값은 TypeError다."""

    with pytest.raises(TypeError):
        validate_field_ops({"title": "raw"})


def test_has_changes_ignores_keep() -> None:
    assert has_changes({"a": KEEP}) is False
    assert has_changes({"a": KEEP, "b": REMOVE}) is True
