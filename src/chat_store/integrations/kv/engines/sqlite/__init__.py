"""
목적: SQLite 엔진 모듈을 노출한다.
설명: SQLiteKeyValueEngine을 외부에 제공한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/kv/engines/sqlite/engine.py
"""

from chat_store.integrations.kv.engines.sqlite.engine import SQLiteKeyValueEngine

__all__ = ["SQLiteKeyValueEngine"]
