"""
목적: 인메모리/SQLite 엔진이 같은 저장 의미를 갖는지 검증한다.
설명: 유일 생성, 접두사 조회 정렬/제한, 인덱스 동순위 정렬, 부분 갱신/업서트, 멱등 삭제, 반환 값 복사를 확인한다.
디자인 패턴: 파라미터화 테스트
참조: src/chat_store/integrations/kv/engines/memory/engine.py, src/chat_store/integrations/kv/engines/sqlite/engine.py
"""

from __future__ import annotations

import pytest

from chat_store.integrations.kv.base import REMOVE, SetField, SortOrder
from chat_store.integrations.kv.engines.memory import InMemoryKeyValueEngine
from chat_store.integrations.kv.engines.sqlite import SQLiteKeyValueEngine
from chat_store.shared.exceptions import AlreadyExistsError, NotFoundError


@pytest.fixture(params=["memory", "sqlite"])
def engine(request, tmp_path, logger):
    if request.param == "memory":
        engine = InMemoryKeyValueEngine(logger=logger)
    else:
        engine = SQLiteKeyValueEngine(
            database_path=str(tmp_path / "kv.sqlite"),
            table_name="contract_items",
            logger=logger,
        )
    engine.connect()
    engine.ensure_table()
    yield engine
    engine.close()


def test_put_get_and_unique_create(engine) -> None:
    """유일 생성은 기존 키에서 AlreadyExistsError를 발생시킨다."""

    engine.put({"PK": "A", "SK": "1", "value": 1})
    engine.put({"PK": "A", "SK": "1", "value": 2})

    with pytest.raises(AlreadyExistsError):
        engine.put({"PK": "A", "SK": "1", "value": 3}, unique_on_create=True)

    assert engine.get("A", "1") == {"PK": "A", "SK": "1", "value": 2}
    assert engine.get("A", "missing") is None


def test_query_prefix_order_and_limit(engine) -> None:
    """정렬 키 접두사 조회의 정렬 방향과 제한을 확인한다."""

    for sk in ["MESSAGE#2", "MESSAGE#1", "MESSAGE#3", "FEEDBACK#1", "META"]:
        engine.put({"PK": "CHAT#c", "SK": sk})
    engine.put({"PK": "CHAT#other", "SK": "MESSAGE#0"})

    ascending = [item["SK"] for item in engine.query("CHAT#c", "MESSAGE#")]
    descending = [item["SK"] for item in engine.query("CHAT#c", "MESSAGE#", SortOrder.DESC, limit=2)]
    everything = engine.query("CHAT#c", "")

    assert ascending == ["MESSAGE#1", "MESSAGE#2", "MESSAGE#3"]
    assert descending == ["MESSAGE#3", "MESSAGE#2"]
    assert len(everything) == 5


def test_query_index_breaks_ties_by_primary_key(engine) -> None:
    """인덱스 정렬 키가 같으면 기본 키 순으로 정렬된다."""

    engine.put({"PK": "CHAT#b", "SK": "META", "GSI1PK": "USER#u", "GSI1SK": "CHAT#t1"})
    engine.put({"PK": "CHAT#a", "SK": "META", "GSI1PK": "USER#u", "GSI1SK": "CHAT#t1"})
    engine.put({"PK": "CHAT#c", "SK": "META", "GSI1PK": "USER#u", "GSI1SK": "CHAT#t0"})
    engine.put({"PK": "CHAT#d", "SK": "META", "GSI1PK": "USER#v", "GSI1SK": "CHAT#t0"})

    ascending = [item["PK"] for item in engine.query_index("USER#u", "CHAT#")]
    newest = [item["PK"] for item in engine.query_index("USER#u", "CHAT#", SortOrder.DESC, limit=1)]

    assert ascending == ["CHAT#c", "CHAT#a", "CHAT#b"]
    assert newest == ["CHAT#b"]


def test_update_set_remove_and_upsert(engine) -> None:
    """부분 갱신과 업서트 의미를 확인한다."""

    engine.put({"PK": "U", "SK": "S", "theme": "dark", "mcp_enabled": True})

    updated = engine.update("U", "S", {"mcp_enabled": REMOVE, "model": SetField("m1")})

    assert updated == {"PK": "U", "SK": "S", "theme": "dark", "model": "m1"}
    assert engine.get("U", "S") == updated

    with pytest.raises(NotFoundError):
        engine.update("U", "missing", {"theme": SetField("light")})

    created = engine.update("U", "new", {"theme": SetField("light")}, upsert=True)
    assert created == {"PK": "U", "SK": "new", "theme": "light"}


def test_delete_is_idempotent(engine) -> None:
    engine.put({"PK": "A", "SK": "1"})

    engine.delete("A", "1")
    engine.delete("A", "1")

    assert engine.get("A", "1") is None
    assert engine.query("A", "") == []


def test_returned_items_are_copies(engine) -> None:
    """반환된 아이템을 수정해도 저장 상태는 바뀌지 않는다."""

    engine.put({"PK": "A", "SK": "1", "parts": [{"text": "x"}]})

    loaded = engine.get("A", "1")
    loaded["parts"][0]["text"] = "mutated"

    assert engine.get("A", "1")["parts"][0]["text"] == "x"
