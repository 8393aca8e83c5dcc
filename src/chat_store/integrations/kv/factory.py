"""
목적: 설정 기반 엔진 생성 함수를 제공한다.
설명: StoreSettings.backend 값에 따라 키-값 엔진 구현체를 선택한다.
디자인 패턴: 팩토리 함수
참조: src/chat_store/shared/config/store_settings.py, src/chat_store/integrations/kv/engines
"""

from __future__ import annotations

from typing import Optional

from chat_store.integrations.kv.base.engine import BaseKeyValueEngine
from chat_store.shared.config import StoreBackend, StoreSettings
from chat_store.shared.logging import Logger


def build_engine(settings: StoreSettings, logger: Optional[Logger] = None) -> BaseKeyValueEngine:
    """설정에 맞는 엔진을 생성한다. 연결은 호출자가 수행한다."""

    if settings.backend == StoreBackend.MEMORY:
        from chat_store.integrations.kv.engines.memory import InMemoryKeyValueEngine

        return InMemoryKeyValueEngine(logger=logger)
    if settings.backend == StoreBackend.SQLITE:
        from chat_store.integrations.kv.engines.sqlite import SQLiteKeyValueEngine

        return SQLiteKeyValueEngine(
            database_path=settings.sqlite_path,
            table_name=settings.table_name,
            logger=logger,
        )
    if settings.backend == StoreBackend.REDIS:
        from chat_store.integrations.kv.engines.redis import RedisKeyValueEngine

        return RedisKeyValueEngine(
            url=settings.redis_url,
            namespace=settings.redis_namespace or settings.table_name,
            logger=logger,
        )
    if settings.backend == StoreBackend.DYNAMODB:
        from chat_store.integrations.kv.engines.dynamodb import DynamoDBKeyValueEngine

        return DynamoDBKeyValueEngine(
            table_name=settings.table_name,
            region_name=settings.dynamodb_region,
            endpoint_url=settings.dynamodb_endpoint,
            logger=logger,
        )
    raise ValueError(f"지원하지 않는 저장소 백엔드입니다: {settings.backend}")
