"""
목적: 키-값 저장소 파사드(EntityStore)를 제공한다.
설명: 엔진을 주입받아 단일 레코드 put/get/update/delete와 접두사 조회를 노출하고, 엔진 예외를 도메인 예외로 감싼다.
디자인 패턴: 파사드
참조: src/chat_store/integrations/kv/base/engine.py, src/chat_store/shared/exceptions/errors.py
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, TypeVar

from chat_store.integrations.kv.base.engine import BaseKeyValueEngine
from chat_store.integrations.kv.base.models import FieldOps, Item, SortOrder
from chat_store.shared.exceptions import ChatStoreError, StoreUnavailableError
from chat_store.shared.logging import Logger, create_default_logger

T = TypeVar("T")


class EntityStore:
    """단일 테이블 키-값 저장소 파사드.

    엔진이 던진 ChatStoreError와 입력 검증 오류(ValueError/TypeError)는 그대로 전파하고,
    그 밖의 예외는 StoreUnavailableError로 감싼다.
    """

    def __init__(self, engine: BaseKeyValueEngine, logger: Optional[Logger] = None) -> None:
        self._engine = engine
        self._logger = logger or create_default_logger("EntityStore")

    @property
    def engine(self) -> BaseKeyValueEngine:
        """내부 엔진을 반환한다."""

        return self._engine

    def connect(self) -> None:
        """엔진 연결을 초기화한다."""

        self._call("connect", self._engine.connect)

    def close(self) -> None:
        """엔진 연결을 종료한다."""

        self._call("close", self._engine.close)

    def ensure_table(self) -> None:
        """테이블/인덱스가 없으면 생성한다."""

        self._call("ensure_table", self._engine.ensure_table)

    def put(self, item: Item, unique_on_create: bool = False) -> None:
        """아이템을 기록한다.

        Args:
            item: PK/SK를 포함한 아이템.
            unique_on_create: True면 같은 기본 키가 있을 때 AlreadyExistsError를 발생시킨다.
        """

        self._call("put", self._engine.put, item, unique_on_create)

    def get(self, pk: str, sk: str) -> Optional[Item]:
        """기본 키로 아이템 1건을 조회한다."""

        return self._call("get", self._engine.get, pk, sk)

    def query_by_prefix(
        self,
        pk: str,
        sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        """파티션 내 정렬 키 접두사로 아이템을 조회한다."""

        return self._call("query_by_prefix", self._engine.query, pk, sk_prefix, order, limit)

    def query_index(
        self,
        gsi_pk: str,
        gsi_sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        """GSI1 파티션 내 인덱스 정렬 키 접두사로 아이템을 조회한다."""

        return self._call("query_index", self._engine.query_index, gsi_pk, gsi_sk_prefix, order, limit)

    def update(self, pk: str, sk: str, field_ops: FieldOps, upsert: bool = False) -> Item:
        """필드 변경 연산을 적용하고 갱신된 아이템을 반환한다.

        레코드가 없으면 upsert가 False일 때 NotFoundError를 발생시킨다.
        """

        return self._call("update", self._engine.update, pk, sk, field_ops, upsert)

    def delete(self, pk: str, sk: str) -> None:
        """아이템을 삭제한다. 없으면 아무 일도 하지 않는다."""

        self._call("delete", self._engine.delete, pk, sk)

    def _call(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        try:
            return func(*args)
        except (ChatStoreError, ValueError, TypeError):
            raise
        except Exception as error:  # noqa: BLE001
            self._raise_store_error(operation, error)

    def _raise_store_error(self, operation: str, error: Exception) -> None:
        wrapped = StoreUnavailableError(
            "저장소 처리 중 오류가 발생했습니다.",
            original=error,
            operation=operation,
            engine=self._engine.name,
        )
        self._logger.error(f"저장소 호출 실패: {operation}", error=wrapped.to_dict())
        raise wrapped from error
