"""
목적: 도메인 모델과 저장 아이템 간 매핑을 검증한다.
설명: 키 속성/인덱스 속성 기록, 선택 필드 생략, 메시지 조각 복원을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/chat_store/core/chat/utils/mapper.py
"""

from __future__ import annotations

from datetime import datetime, timezone

from chat_store.core.chat.models import (
    Chat,
    ChatRole,
    Message,
    TextPart,
    Theme,
    ToolCallPart,
    ToolResultPart,
    UserSettings,
)
from chat_store.core.chat.utils import ChatItemMapper

_AT = datetime(2026, 1, 2, 3, 4, 5, 6, tzinfo=timezone.utc)


def test_chat_item_carries_owner_index() -> None:
    """대화 아이템에 소유자 인덱스 키가 기록되는지 확인한다."""

    mapper = ChatItemMapper()
    chat = Chat(id="c1", user_id="u1", title="T", model_id="m", created_at=_AT, updated_at=_AT)

    item = mapper.chat_to_item(chat)

    assert item["PK"] == "CHAT#c1"
    assert item["SK"] == "META"
    assert item["GSI1PK"] == "USER#u1"
    assert item["GSI1SK"] == "CHAT#2026-01-02T03:04:05.000006Z"
    assert "share_id" not in item
    assert mapper.chat_from_item(item) == chat


def test_message_parts_survive_mapping() -> None:
    """메시지 조각 타입이 판별자 기준으로 복원되는지 확인한다."""

    mapper = ChatItemMapper()
    message = Message(
        id="m1",
        chat_id="c1",
        role=ChatRole.ASSISTANT,
        content="done",
        parts=[
            TextPart(text="hello"),
            ToolCallPart(tool_call_id="t1", tool_name="search", args={"q": "x", "n": 2}),
            ToolResultPart(tool_call_id="t1", tool_name="search", result=["a", "b"]),
        ],
        created_at=_AT,
    )

    item = mapper.message_to_item(message)
    restored = mapper.message_from_item(item)

    assert item["parts"][1]["type"] == "tool-call"
    assert isinstance(restored.parts[1], ToolCallPart)
    assert isinstance(restored.parts[2], ToolResultPart)
    assert restored == message


def test_settings_item_omits_cleared_fields() -> None:
    """None 설정 필드는 아이템에 기록되지 않는다."""

    mapper = ChatItemMapper()
    settings = UserSettings(user_id="u1", theme=Theme.DARK)

    item = mapper.settings_to_item(settings)

    assert item["theme"] == "dark"
    assert "mcp_enabled" not in item
    assert mapper.settings_from_item(item).theme == Theme.DARK
