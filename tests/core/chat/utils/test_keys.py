"""
목적: 단일 테이블 키 스키마를 검증한다.
설명: 엔티티별 키 배치, 충돌 없음, 고정 폭 타임스탬프 정렬, 빈 식별자 거부를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/chat_store/core/chat/utils/keys.py
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from chat_store.core.chat.utils import (
    chat_key,
    chat_owner_index,
    feedback_key,
    feedback_prefix,
    format_timestamp,
    message_key,
    message_prefix,
    parse_timestamp,
    settings_key,
    share_key,
    user_email_index,
    user_key,
)

_AT = datetime(2026, 3, 4, 5, 6, 7, 890, tzinfo=timezone.utc)


def test_key_layout_matches_single_table_design() -> None:
    """엔티티별 키 배치를 확인한다."""

    assert user_key("u1") == ("USER#u1", "PROFILE")
    assert user_email_index("a@b.c") == ("USERS", "a@b.c")
    assert settings_key("u1") == ("USER#u1", "SETTINGS")
    assert chat_key("c1") == ("CHAT#c1", "META")
    assert chat_owner_index("u1", _AT) == ("USER#u1", "CHAT#2026-03-04T05:06:07.000890Z")
    assert chat_owner_index("u1") == ("USER#u1", "CHAT#")
    assert message_key("c1", _AT, "m1") == ("CHAT#c1", "MESSAGE#2026-03-04T05:06:07.000890Z#m1")
    assert message_prefix("c1") == ("CHAT#c1", "MESSAGE#")
    assert feedback_key("c1", "m1") == ("CHAT#c1", "FEEDBACK#m1")
    assert feedback_prefix("c1") == ("CHAT#c1", "FEEDBACK#")
    assert share_key("s1") == ("PUBLIC#s1", "MAPPING")


def test_key_pairs_expose_named_fields() -> None:
    """KeyPair가 pk/sk 이름으로 접근되는지 확인한다."""

    pair = chat_key("c1")

    assert pair.pk == "CHAT#c1"
    assert pair.sk == "META"


def test_distinct_entities_never_collide() -> None:
    """같은 식별자를 써도 엔티티 종류가 다르면 키가 다르다."""

    keys = {
        user_key("x"),
        settings_key("x"),
        chat_key("x"),
        message_key("x", _AT, "x"),
        feedback_key("x", "x"),
        share_key("x"),
    }

    assert len(keys) == 6


def test_timestamp_strings_sort_like_time() -> None:
    """고정 폭 문자열 순서가 시간 순서와 같은지 확인한다."""

    moments = [
        _AT,
        _AT + timedelta(microseconds=1),
        _AT + timedelta(seconds=9),
        _AT + timedelta(seconds=10),
        _AT + timedelta(days=400),
    ]
    formatted = [format_timestamp(moment) for moment in moments]

    assert sorted(formatted) == formatted
    assert len({len(value) for value in formatted}) == 1


def test_years_before_1000_keep_fixed_width() -> None:
    """1000년 미만도 4자리 연도로 채워 문자열 순서가 유지된다."""

    ancient = datetime(999, 1, 1, tzinfo=timezone.utc)
    modern = datetime(2000, 1, 1, tzinfo=timezone.utc)

    assert format_timestamp(ancient) == "0999-01-01T00:00:00.000000Z"
    assert format_timestamp(ancient) < format_timestamp(modern)
    assert len(format_timestamp(ancient)) == len(format_timestamp(modern))
    assert parse_timestamp(format_timestamp(ancient)) == ancient


def test_timestamp_round_trip_and_timezone_normalization() -> None:
    """다른 시간대 입력이 UTC로 정규화되는지 확인한다."""

    kst = timezone(timedelta(hours=9))
    local = datetime(2026, 3, 4, 14, 6, 7, 890, tzinfo=kst)

    assert format_timestamp(local) == format_timestamp(_AT)
    assert parse_timestamp(format_timestamp(_AT)) == _AT
    assert parse_timestamp("2026-03-04T05:06:07.123Z") == datetime(
        2026, 3, 4, 5, 6, 7, 123000, tzinfo=timezone.utc
    )


@pytest.mark.parametrize(
    "build",
    [
        lambda: user_key(""),
        lambda: chat_key(""),
        lambda: message_key("c1", _AT, ""),
        lambda: share_key(""),
        lambda: user_email_index(""),
    ],
)
def test_empty_identifiers_are_rejected(build) -> None:
    """빈 식별자는 ValueError로 거부된다."""

    with pytest.raises(ValueError):
        build()
