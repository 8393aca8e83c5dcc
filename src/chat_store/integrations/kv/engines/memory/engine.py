"""
목적: 인메모리 키-값 엔진을 제공한다.
설명: 파티션별 사전에 아이템을 보관하고, 정렬 키/보조 인덱스 접두사 조회를 정렬로 처리한다.
디자인 패턴: 어댑터 패턴
참조: src/chat_store/integrations/kv/base/engine.py
"""

from __future__ import annotations

import copy
import threading
from typing import Dict, List, Optional, Tuple

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
from chat_store.shared.exceptions import AlreadyExistsError, NotFoundError
from chat_store.shared.logging import Logger, create_default_logger


class InMemoryKeyValueEngine(BaseKeyValueEngine):
    """인메모리 엔진 구현체.

    테스트와 단일 프로세스 실행용이며, 모든 연산은 하나의 RLock으로 직렬화된다.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or create_default_logger("InMemoryKeyValueEngine")
        self._lock = threading.RLock()
        self._partitions: Dict[str, Dict[str, Item]] = {}

    @property
    def name(self) -> str:
        return "memory"

    def connect(self) -> None:
        return

    def close(self) -> None:
        return

    def ensure_table(self) -> None:
        return

    def put(self, item: Item, unique_on_create: bool = False) -> None:
        pk, sk = item_key(item)
        with self._lock:
            partition = self._partitions.setdefault(pk, {})
            if unique_on_create and sk in partition:
                raise AlreadyExistsError("이미 존재하는 레코드입니다.", pk=pk, sk=sk)
            partition[sk] = copy.deepcopy(item)

    def get(self, pk: str, sk: str) -> Optional[Item]:
        with self._lock:
            stored = self._partitions.get(pk, {}).get(sk)
            return copy.deepcopy(stored) if stored is not None else None

    def query(
        self,
        pk: str,
        sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        with self._lock:
            partition = self._partitions.get(pk, {})
            keys = sorted(
                (sk for sk in partition if sk.startswith(sk_prefix)),
                reverse=order == SortOrder.DESC,
            )
            if limit is not None:
                keys = keys[:limit]
            return [copy.deepcopy(partition[sk]) for sk in keys]

    def query_index(
        self,
        gsi_pk: str,
        gsi_sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        with self._lock:
            matches: List[Tuple[Tuple[str, str, str], Item]] = []
            for partition in self._partitions.values():
                for item in partition.values():
                    key = index_key(item)
                    if key is None or key[0] != gsi_pk or not key[1].startswith(gsi_sk_prefix):
                        continue
                    matches.append(((key[1], item[PK_ATTR], item[SK_ATTR]), item))
            matches.sort(key=lambda entry: entry[0], reverse=order == SortOrder.DESC)
            if limit is not None:
                matches = matches[:limit]
            return [copy.deepcopy(item) for _, item in matches]

    def update(self, pk: str, sk: str, field_ops: FieldOps, upsert: bool = False) -> Item:
        validate_field_ops(field_ops)
        with self._lock:
            partition = self._partitions.get(pk, {})
            current = partition.get(sk)
            if current is None:
                if not upsert:
                    raise NotFoundError("갱신할 레코드가 없습니다.", pk=pk, sk=sk)
                current = {PK_ATTR: pk, SK_ATTR: sk}
            updated = apply_field_ops(current, field_ops)
            self._partitions.setdefault(pk, {})[sk] = updated
            return copy.deepcopy(updated)

    def delete(self, pk: str, sk: str) -> None:
        with self._lock:
            partition = self._partitions.get(pk)
            if partition is None:
                return
            partition.pop(sk, None)
            if not partition:
                self._partitions.pop(pk, None)
