"""
목적: 키-값 엔진 구현체를 노출한다.
설명: 인메모리/SQLite/Redis/DynamoDB 엔진을 한곳에서 제공한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/kv/factory.py
"""

from chat_store.integrations.kv.engines.dynamodb import DynamoDBKeyValueEngine
from chat_store.integrations.kv.engines.memory import InMemoryKeyValueEngine
from chat_store.integrations.kv.engines.redis import RedisKeyValueEngine
from chat_store.integrations.kv.engines.sqlite import SQLiteKeyValueEngine

__all__ = [
    "DynamoDBKeyValueEngine",
    "InMemoryKeyValueEngine",
    "RedisKeyValueEngine",
    "SQLiteKeyValueEngine",
]
