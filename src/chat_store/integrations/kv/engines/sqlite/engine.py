"""
목적: SQLite 기반 키-값 엔진을 제공한다.
설명: (pk, sk) 기본 키와 (gsi1pk, gsi1sk) 인덱스를 가진 단일 테이블에 아이템을 JSON 본문으로 저장한다.
디자인 패턴: 어댑터 패턴
참조: src/chat_store/integrations/kv/base/engine.py, src/chat_store/integrations/kv/engines/sqlite/connection.py
"""

from __future__ import annotations

import json
import re
import sqlite3
import threading
from typing import List, Optional

from chat_store.core.chat.const import DEFAULT_SQLITE_PATH, DEFAULT_TABLE_NAME
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
from chat_store.integrations.kv.engines.sqlite.connection import SqliteConnectionManager
from chat_store.shared.exceptions import AlreadyExistsError, NotFoundError
from chat_store.shared.logging import Logger, create_default_logger

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SQLiteKeyValueEngine(BaseKeyValueEngine):
    """SQLite 엔진 구현체."""

    def __init__(
        self,
        database_path: str = DEFAULT_SQLITE_PATH,
        table_name: str = DEFAULT_TABLE_NAME,
        logger: Optional[Logger] = None,
    ) -> None:
        if not _IDENTIFIER_PATTERN.match(table_name):
            raise ValueError(f"사용할 수 없는 테이블 이름입니다: {table_name}")
        self._logger = logger or create_default_logger("SQLiteKeyValueEngine")
        self._table = table_name
        self._lock = threading.RLock()
        self._connection = SqliteConnectionManager(database_path=database_path, logger=self._logger)

    @property
    def name(self) -> str:
        return "sqlite"

    def connect(self) -> None:
        self._connection.connect()

    def close(self) -> None:
        self._connection.close()

    def ensure_table(self) -> None:
        connection = self._connection.ensure_connection()
        with self._lock, connection:
            connection.execute(
                f'CREATE TABLE IF NOT EXISTS "{self._table}" ('
                "pk TEXT NOT NULL, sk TEXT NOT NULL, gsi1pk TEXT, gsi1sk TEXT, "
                "body TEXT NOT NULL, PRIMARY KEY (pk, sk))"
            )
            connection.execute(
                f'CREATE INDEX IF NOT EXISTS "{self._table}_gsi1" '
                f'ON "{self._table}" (gsi1pk, gsi1sk, pk, sk)'
            )
        self._logger.info(f"SQLite 테이블 준비 완료: {self._table}")

    def put(self, item: Item, unique_on_create: bool = False) -> None:
        pk, sk = item_key(item)
        connection = self._connection.ensure_connection()
        verb = "INSERT" if unique_on_create else "INSERT OR REPLACE"
        with self._lock:
            try:
                with connection:
                    self._write(connection, verb, item)
            except sqlite3.IntegrityError as error:
                raise AlreadyExistsError("이미 존재하는 레코드입니다.", original=error, pk=pk, sk=sk) from error

    def get(self, pk: str, sk: str) -> Optional[Item]:
        connection = self._connection.ensure_connection()
        with self._lock:
            row = connection.execute(
                f'SELECT body FROM "{self._table}" WHERE pk = ? AND sk = ?',
                (pk, sk),
            ).fetchone()
        return self._decode(row["body"]) if row else None

    def query(
        self,
        pk: str,
        sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        direction = self._direction(order)
        connection = self._connection.ensure_connection()
        with self._lock:
            rows = connection.execute(
                f'SELECT body FROM "{self._table}" '
                "WHERE pk = ? AND substr(sk, 1, ?) = ? "
                f"ORDER BY sk {direction} LIMIT ?",
                (pk, len(sk_prefix), sk_prefix, self._limit(limit)),
            ).fetchall()
        return [self._decode(row["body"]) for row in rows]

    def query_index(
        self,
        gsi_pk: str,
        gsi_sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        direction = self._direction(order)
        connection = self._connection.ensure_connection()
        with self._lock:
            rows = connection.execute(
                f'SELECT body FROM "{self._table}" '
                "WHERE gsi1pk = ? AND substr(gsi1sk, 1, ?) = ? "
                f"ORDER BY gsi1sk {direction}, pk {direction}, sk {direction} LIMIT ?",
                (gsi_pk, len(gsi_sk_prefix), gsi_sk_prefix, self._limit(limit)),
            ).fetchall()
        return [self._decode(row["body"]) for row in rows]

    def update(self, pk: str, sk: str, field_ops: FieldOps, upsert: bool = False) -> Item:
        validate_field_ops(field_ops)
        connection = self._connection.ensure_connection()
        with self._lock, connection:
            row = connection.execute(
                f'SELECT body FROM "{self._table}" WHERE pk = ? AND sk = ?',
                (pk, sk),
            ).fetchone()
            if row is None:
                if not upsert:
                    raise NotFoundError("갱신할 레코드가 없습니다.", pk=pk, sk=sk)
                current: Item = {PK_ATTR: pk, SK_ATTR: sk}
            else:
                current = self._decode(row["body"])
            updated = apply_field_ops(current, field_ops)
            self._write(connection, "INSERT OR REPLACE", updated)
        return updated

    def delete(self, pk: str, sk: str) -> None:
        connection = self._connection.ensure_connection()
        with self._lock, connection:
            connection.execute(
                f'DELETE FROM "{self._table}" WHERE pk = ? AND sk = ?',
                (pk, sk),
            )

    def _write(self, connection: sqlite3.Connection, verb: str, item: Item) -> None:
        pk, sk = item_key(item)
        gsi = index_key(item)
        connection.execute(
            f'{verb} INTO "{self._table}" (pk, sk, gsi1pk, gsi1sk, body) VALUES (?, ?, ?, ?, ?)',
            (
                pk,
                sk,
                gsi[0] if gsi else None,
                gsi[1] if gsi else None,
                json.dumps(item, ensure_ascii=False),
            ),
        )

    def _decode(self, body: str) -> Item:
        return json.loads(body)

    def _direction(self, order: SortOrder) -> str:
        return "DESC" if order == SortOrder.DESC else "ASC"

    def _limit(self, limit: Optional[int]) -> int:
        # SQLite는 LIMIT -1을 무제한으로 해석한다.
        return -1 if limit is None else max(0, limit)
