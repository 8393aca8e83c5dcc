"""
목적: Redis 기반 키-값 엔진을 제공한다.
설명: 파티션별 해시에 아이템 JSON을 저장하고, 사전식 정렬 집합으로 정렬 키/보조 인덱스 조회를 수행한다.
디자인 패턴: 어댑터 패턴
참조: src/chat_store/integrations/kv/base/engine.py, src/chat_store/integrations/kv/engines/redis/keyspace.py
"""

from __future__ import annotations

import json
from typing import List, Optional

from chat_store.core.chat.const import DEFAULT_TABLE_NAME
from chat_store.integrations.kv.base.engine import BaseKeyValueEngine
from chat_store.integrations.kv.base.models import (
    FieldOps,
    Item,
    PK_ATTR,
    SK_ATTR,
    SortOrder,
    apply_field_ops,
    index_key,
    item_key,
    validate_field_ops,
)
from chat_store.integrations.kv.engines.redis.connection import RedisConnectionManager
from chat_store.integrations.kv.engines.redis.keyspace import RedisKeyspaceHelper
from chat_store.shared.exceptions import AlreadyExistsError, NotFoundError
from chat_store.shared.logging import Logger, create_default_logger

try:
    import redis
except ImportError:  # pragma: no cover - 환경 의존 로딩
    redis = None


class RedisKeyValueEngine(BaseKeyValueEngine):
    """Redis 엔진 구현체.

    단일 레코드 쓰기는 파티션 해시를 WATCH한 MULTI/EXEC 트랜잭션으로 직렬화한다.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        host: str = "127.0.0.1",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        namespace: str = DEFAULT_TABLE_NAME,
        logger: Optional[Logger] = None,
        client=None,
    ) -> None:
        if not url:
            auth = f":{password}@" if password else ""
            url = f"redis://{auth}{host}:{port}/{db}"
        self._logger = logger or create_default_logger("RedisKeyValueEngine")
        self._connection = RedisConnectionManager(
            url=url,
            logger=self._logger,
            redis_module=redis,
            client=client,
        )
        self._keyspace = RedisKeyspaceHelper(namespace)

    @property
    def name(self) -> str:
        return "redis"

    def connect(self) -> None:
        self._connection.connect()

    def close(self) -> None:
        self._connection.close()

    def ensure_table(self) -> None:
        self._connection.ensure_client().ping()
        self._logger.info("Redis 키스페이스 준비 완료")

    def put(self, item: Item, unique_on_create: bool = False) -> None:
        pk, sk = item_key(item)
        client = self._connection.ensure_client()
        hash_key = self._keyspace.partition_key(pk)

        def _write(pipe) -> None:
            previous = pipe.hget(hash_key, sk)
            if previous is not None and unique_on_create:
                raise AlreadyExistsError("이미 존재하는 레코드입니다.", pk=pk, sk=sk)
            pipe.multi()
            if previous is not None:
                self._unindex(pipe, self._decode(previous))
            self._stage_write(pipe, item)

        client.transaction(_write, hash_key)

    def get(self, pk: str, sk: str) -> Optional[Item]:
        client = self._connection.ensure_client()
        raw = client.hget(self._keyspace.partition_key(pk), sk)
        return self._decode(raw) if raw is not None else None

    def query(
        self,
        pk: str,
        sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        client = self._connection.ensure_client()
        sort_keys = self._range(client, self._keyspace.order_key(pk), sk_prefix, order, limit)
        if not sort_keys:
            return []
        raws = client.hmget(self._keyspace.partition_key(pk), sort_keys)
        return [self._decode(raw) for raw in raws if raw is not None]

    def query_index(
        self,
        gsi_pk: str,
        gsi_sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        client = self._connection.ensure_client()
        members = self._range(client, self._keyspace.index_key(gsi_pk), gsi_sk_prefix, order, limit)
        if not members:
            return []
        pipe = client.pipeline(transaction=False)
        for member in members:
            _, pk, sk = self._keyspace.parse_index_member(member)
            pipe.hget(self._keyspace.partition_key(pk), sk)
        return [self._decode(raw) for raw in pipe.execute() if raw is not None]

    def update(self, pk: str, sk: str, field_ops: FieldOps, upsert: bool = False) -> Item:
        validate_field_ops(field_ops)
        client = self._connection.ensure_client()
        hash_key = self._keyspace.partition_key(pk)

        def _write(pipe) -> Item:
            raw = pipe.hget(hash_key, sk)
            if raw is None:
                if not upsert:
                    raise NotFoundError("갱신할 레코드가 없습니다.", pk=pk, sk=sk)
                current: Item = {PK_ATTR: pk, SK_ATTR: sk}
            else:
                current = self._decode(raw)
            updated = apply_field_ops(current, field_ops)
            pipe.multi()
            self._stage_write(pipe, updated)
            return updated

        return client.transaction(_write, hash_key, value_from_callable=True)

    def delete(self, pk: str, sk: str) -> None:
        client = self._connection.ensure_client()
        hash_key = self._keyspace.partition_key(pk)

        def _remove(pipe) -> None:
            raw = pipe.hget(hash_key, sk)
            if raw is None:
                return
            pipe.multi()
            pipe.hdel(hash_key, sk)
            pipe.zrem(self._keyspace.order_key(pk), sk)
            self._unindex(pipe, self._decode(raw))

        client.transaction(_remove, hash_key)

    def _stage_write(self, pipe, item: Item) -> None:
        pk, sk = item_key(item)
        pipe.hset(self._keyspace.partition_key(pk), sk, json.dumps(item, ensure_ascii=False))
        pipe.zadd(self._keyspace.order_key(pk), {sk: 0})
        gsi = index_key(item)
        if gsi is not None:
            member = self._keyspace.index_member(gsi[1], pk, sk)
            pipe.zadd(self._keyspace.index_key(gsi[0]), {member: 0})

    def _unindex(self, pipe, item: Item) -> None:
        gsi = index_key(item)
        if gsi is None:
            return
        pk, sk = item_key(item)
        pipe.zrem(self._keyspace.index_key(gsi[0]), self._keyspace.index_member(gsi[1], pk, sk))

    def _range(self, client, key: str, prefix: str, order: SortOrder, limit: Optional[int]) -> list:
        low, high = self._keyspace.prefix_range(prefix)
        paging = {"start": 0, "num": limit} if limit is not None else {}
        if order == SortOrder.DESC:
            return client.zrevrangebylex(key, high, low, **paging)
        return client.zrangebylex(key, low, high, **paging)

    def _decode(self, raw: bytes | str) -> Item:
        return json.loads(raw)
