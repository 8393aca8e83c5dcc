"""
목적: 메시지 로그 저장소 동작을 검증한다.
설명: 추가 순서 보존(같은 시각 포함), 이후 메시지 삭제, 내용 편집, 전체 삭제, 대화 갱신 시각 기록을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/chat_store/shared/chat/repositories/message_log.py
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from chat_store.core.chat.models import ChatRole, MessageDraft, TextPart
from chat_store.shared.logging import LogLevel


def _draft(content: str, role: ChatRole = ChatRole.USER) -> MessageDraft:
    return MessageDraft(role=role, content=content, parts=[TextPart(text=content)])


def test_messages_are_listed_in_append_order(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Test", "model-a")
    appended = [chat_store.messages.append(chat.id, _draft(f"m{index}")) for index in range(4)]

    listed = chat_store.messages.list(chat.id)

    assert [message.id for message in listed] == [message.id for message in appended]
    assert listed[0].parts == [TextPart(text="m0")]


def test_append_order_survives_a_frozen_clock(entity_store, logger, make_clock) -> None:
    """시계가 멈춰 있어도 서버가 부여한 시각은 단조 증가한다."""

    from chat_store.shared.chat.services import ChatStore

    frozen = make_clock(step=timedelta(0))
    store = ChatStore(entity_store, logger=logger, clock=frozen)
    chat = store.chats.create("u1", "Test", "model-a")

    appended = [store.messages.append(chat.id, _draft(f"m{index}")) for index in range(5)]
    listed = store.messages.list(chat.id)

    assert [message.content for message in listed] == ["m0", "m1", "m2", "m3", "m4"]
    assert [message.created_at for message in listed] == [message.created_at for message in appended]
    assert len({message.created_at for message in listed}) == 5


def test_explicit_timestamp_is_kept(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Test", "model-a")
    at = datetime(2020, 5, 5, tzinfo=timezone.utc)

    message = chat_store.messages.append(chat.id, MessageDraft(role=ChatRole.SYSTEM, content="x", created_at=at))

    assert message.created_at == at
    assert chat_store.messages.list(chat.id)[0].id == message.id


def test_delete_after_keeps_prefix(chat_store) -> None:
    """세 메시지 중 두 번째 이후를 지우면 앞의 두 개만 남는다."""

    chat = chat_store.chats.create("u1", "Test", "model-a")
    first = chat_store.messages.append(chat.id, _draft("one"))
    second = chat_store.messages.append(chat.id, _draft("two", ChatRole.ASSISTANT))
    chat_store.messages.append(chat.id, _draft("three"))

    removed = chat_store.messages.delete_after(chat.id, second.id)

    assert removed == 1
    assert [message.id for message in chat_store.messages.list(chat.id)] == [first.id, second.id]


def test_delete_after_unknown_message_is_noop(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Test", "model-a")
    chat_store.messages.append(chat.id, _draft("one"))

    assert chat_store.messages.delete_after(chat.id, "missing") == 0
    assert len(chat_store.messages.list(chat.id)) == 1


def test_update_content_rewrites_only_content(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Test", "model-a")
    original = chat_store.messages.append(chat.id, _draft("before"))

    updated = chat_store.messages.update_content(chat.id, original.id, "after")

    assert updated is not None
    assert updated.content == "after"
    assert updated.created_at == original.created_at
    assert updated.parts == original.parts
    assert chat_store.messages.update_content(chat.id, "missing", "x") is None


def test_append_touches_chat_updated_at(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Test", "model-a")

    chat_store.messages.append(chat.id, _draft("hi"))

    assert chat_store.chats.get(chat.id).updated_at > chat.updated_at


def test_chat_updated_at_follows_latest_message(entity_store, logger, make_clock) -> None:
    """밀려난 시각이나 지정 시각으로 저장해도 대화 updated_at은 마지막 메시지 시각과 같다."""

    from chat_store.shared.chat.services import ChatStore

    store = ChatStore(entity_store, logger=logger, clock=make_clock(step=timedelta(0)))
    chat = store.chats.create("u1", "Test", "model-a")

    bumped = [store.messages.append(chat.id, _draft(f"m{index}")) for index in range(3)]

    assert bumped[-1].created_at > chat.created_at
    assert store.chats.get(chat.id).updated_at == bumped[-1].created_at

    later = datetime(2030, 1, 1, tzinfo=timezone.utc)
    explicit = store.messages.append(
        chat.id, MessageDraft(role=ChatRole.ASSISTANT, content="x", created_at=later)
    )

    assert store.chats.get(chat.id).updated_at == explicit.created_at == later


def test_append_to_missing_chat_logs_warning_and_keeps_message(chat_store, logger) -> None:
    message = chat_store.messages.append("ghost", _draft("orphan"))

    assert [item.id for item in chat_store.messages.list("ghost")] == [message.id]
    assert any(record.level == LogLevel.WARNING for record in logger.repository.list())


def test_delete_all_tolerates_empty_log(chat_store) -> None:
    chat = chat_store.chats.create("u1", "Test", "model-a")

    assert chat_store.messages.delete_all(chat.id) == 0
    chat_store.messages.append(chat.id, _draft("a"))
    chat_store.messages.append(chat.id, _draft("b"))
    assert chat_store.messages.delete_all(chat.id) == 2
    assert chat_store.messages.list(chat.id) == []
