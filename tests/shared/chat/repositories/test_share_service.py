"""
목적: 공개 공유와 포크 서비스를 검증한다.
설명: 공유 식별자 생성/재사용, 공유 조회, 임의 식별자 조회 실패, 깊은 복사 포크, 원본 부재 시 오류를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/chat_store/shared/chat/repositories/share_service.py
"""

from __future__ import annotations

import re

import pytest

from chat_store.core.chat.models import ChatRole, MessageDraft, TextPart, ToolCallPart
from chat_store.core.chat.utils import share_key
from chat_store.shared.chat.repositories import generate_share_id
from chat_store.shared.exceptions import NotFoundError


def test_generated_share_ids_are_url_safe_and_twelve_chars() -> None:
    ids = {generate_share_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(re.fullmatch(r"[A-Za-z0-9_-]{12}", share_id) for share_id in ids)


def test_make_public_then_resolve(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Shared", "model-a")

    share_id = chat_store.shares.make_public(chat.id, "u1")
    resolved = chat_store.shares.resolve_share(share_id)
    share = chat_store.shares.get_share(share_id)

    assert resolved is not None
    assert resolved.id == chat.id
    assert resolved.is_public is True
    assert resolved.share_id == share_id
    assert share.user_id == "u1"
    assert share.chat_id == chat.id


def test_make_public_is_idempotent(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Shared", "model-a")

    first = chat_store.shares.make_public(chat.id, "u1")
    second = chat_store.shares.make_public(chat.id, "u1")

    assert first == second


def test_make_public_restores_missing_mapping(chat_store, entity_store) -> None:
    chat = chat_store.chats.create("u1", "Shared", "model-a")
    share_id = chat_store.shares.make_public(chat.id, "u1")
    entity_store.delete(*share_key(share_id))

    assert chat_store.shares.make_public(chat.id, "u1") == share_id
    assert chat_store.shares.resolve_share(share_id).id == chat.id


def test_make_public_missing_chat_raises(chat_store) -> None:
    with pytest.raises(NotFoundError):
        chat_store.shares.make_public("missing", "u1")


def test_resolve_unknown_share_returns_none(chat_store) -> None:
    assert chat_store.shares.resolve_share(generate_share_id()) is None


def test_resolve_after_chat_deleted_returns_none(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Shared", "model-a")
    share_id = chat_store.shares.make_public(chat.id, "u1")

    chat_store.chats.delete(chat.id)

    assert chat_store.shares.resolve_share(share_id) is None


def test_fork_copies_messages_deeply(chat_store) -> None:
    original = chat_store.chats.create("u1", "Plan", "model-a")
    chat_store.messages.append(original.id, MessageDraft(role=ChatRole.USER, content="question"))
    chat_store.messages.append(
        original.id,
        MessageDraft(
            role=ChatRole.ASSISTANT,
            content="answer",
            parts=[
                TextPart(text="answer"),
                ToolCallPart(tool_call_id="t1", tool_name="create_issue", args={"title": "x"}),
            ],
        ),
    )

    forked_id = chat_store.shares.fork(original.id, "u2")
    forked = chat_store.chats.get(forked_id)
    source_messages = chat_store.messages.list(original.id)
    forked_messages = chat_store.messages.list(forked_id)

    assert forked.title == "Plan (Fork)"
    assert forked.user_id == "u2"
    assert forked.model_id == "model-a"
    assert [message.content for message in forked_messages] == ["question", "answer"]
    assert [message.role for message in forked_messages] == [ChatRole.USER, ChatRole.ASSISTANT]
    assert forked_messages[1].parts == source_messages[1].parts
    assert {message.id for message in forked_messages}.isdisjoint(message.id for message in source_messages)

    chat_store.messages.update_content(original.id, source_messages[1].id, "edited")
    assert chat_store.messages.list(forked_id)[1].content == "answer"


def test_fork_missing_chat_raises(chat_store) -> None:
    with pytest.raises(NotFoundError):
        chat_store.shares.fork("missing", "u2")


def test_fork_survives_evicting_its_own_source(chat_store) -> None:
    """포크 대상이 새 소유자의 가장 오래된 대화여도 복사본은 온전하다."""

    source = chat_store.chats.create("u1", "oldest", "model-a")
    chat_store.messages.append(source.id, MessageDraft(role=ChatRole.USER, content="keep me"))
    for index in range(chat_store.chats.max_chats - 1):
        chat_store.chats.create("u1", f"filler {index}", "model-a")

    forked_id = chat_store.shares.fork(source.id, "u1")

    assert chat_store.chats.get(source.id) is None
    assert [message.content for message in chat_store.messages.list(forked_id)] == ["keep me"]
