"""
목적: DynamoDB 기반 키-값 엔진을 제공한다.
설명: 단일 테이블(PK/SK)과 GSI1 보조 인덱스 위에서 조건부 쓰기, begins_with 조회, SET/REMOVE 갱신을 수행한다.
디자인 패턴: 어댑터 패턴
참조: src/chat_store/integrations/kv/base/engine.py
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

from chat_store.core.chat.const import DEFAULT_TABLE_NAME
from chat_store.integrations.kv.base.engine import BaseKeyValueEngine
from chat_store.integrations.kv.base.models import (
    GSI1_INDEX_NAME,
    GSI1_PK_ATTR,
    GSI1_SK_ATTR,
    FieldOps,
    Item,
    PK_ATTR,
    SK_ATTR,
    RemoveField,
    SetField,
    SortOrder,
    has_changes,
    item_key,
    validate_field_ops,
)
from chat_store.shared.exceptions import AlreadyExistsError, NotFoundError
from chat_store.shared.logging import Logger, create_default_logger

_CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"
_RESOURCE_NOT_FOUND = "ResourceNotFoundException"


def _to_dynamo(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {key: _to_dynamo(inner) for key, inner in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_dynamo(inner) for inner in value]
    return value


def _from_dynamo(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: _from_dynamo(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [_from_dynamo(inner) for inner in value]
    return value


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class DynamoDBKeyValueEngine(BaseKeyValueEngine):
    """DynamoDB 엔진 구현체.

    Args:
        table_name: 테이블 이름.
        region_name: AWS 리전.
        endpoint_url: 로컬 DynamoDB 등 엔드포인트.
        logger: 주입 가능한 로거.
        resource: 주입 가능한 boto3 DynamoDB 리소스(테스트용).
    """

    def __init__(
        self,
        table_name: str = DEFAULT_TABLE_NAME,
        region_name: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        logger: Optional[Logger] = None,
        resource=None,
    ) -> None:
        self._table_name = table_name
        self._region_name = region_name
        self._endpoint_url = endpoint_url
        self._logger = logger or create_default_logger("DynamoDBKeyValueEngine")
        self._resource = resource
        self._table = None

    @property
    def name(self) -> str:
        return "dynamodb"

    def connect(self) -> None:
        if self._table is not None:
            return
        if self._resource is None:
            self._resource = boto3.resource(
                "dynamodb",
                region_name=self._region_name,
                endpoint_url=self._endpoint_url,
            )
        self._table = self._resource.Table(self._table_name)
        self._logger.info(f"DynamoDB 테이블 핸들 준비: {self._table_name}")

    def close(self) -> None:
        self._table = None

    def ensure_table(self) -> None:
        self.connect()
        client = self._resource.meta.client
        try:
            client.describe_table(TableName=self._table_name)
            return
        except ClientError as error:
            if _error_code(error) != _RESOURCE_NOT_FOUND:
                raise
        client.create_table(
            TableName=self._table_name,
            KeySchema=[
                {"AttributeName": PK_ATTR, "KeyType": "HASH"},
                {"AttributeName": SK_ATTR, "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": name, "AttributeType": "S"}
                for name in (PK_ATTR, SK_ATTR, GSI1_PK_ATTR, GSI1_SK_ATTR)
            ],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": GSI1_INDEX_NAME,
                    "KeySchema": [
                        {"AttributeName": GSI1_PK_ATTR, "KeyType": "HASH"},
                        {"AttributeName": GSI1_SK_ATTR, "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                }
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        client.get_waiter("table_exists").wait(TableName=self._table_name)
        self._logger.info(f"DynamoDB 테이블 생성 완료: {self._table_name}")

    def put(self, item: Item, unique_on_create: bool = False) -> None:
        pk, sk = item_key(item)
        request: Dict[str, Any] = {"Item": _to_dynamo(item)}
        if unique_on_create:
            request["ConditionExpression"] = "attribute_not_exists(#pk)"
            request["ExpressionAttributeNames"] = {"#pk": PK_ATTR}
        try:
            self._ensure_table().put_item(**request)
        except ClientError as error:
            if _error_code(error) == _CONDITIONAL_CHECK_FAILED:
                raise AlreadyExistsError("이미 존재하는 레코드입니다.", original=error, pk=pk, sk=sk) from error
            raise

    def get(self, pk: str, sk: str) -> Optional[Item]:
        response = self._ensure_table().get_item(Key={PK_ATTR: pk, SK_ATTR: sk})
        item = response.get("Item")
        return _from_dynamo(item) if item is not None else None

    def query(
        self,
        pk: str,
        sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        return self._query(PK_ATTR, SK_ATTR, pk, sk_prefix, order, limit, index_name=None)

    def query_index(
        self,
        gsi_pk: str,
        gsi_sk_prefix: str,
        order: SortOrder = SortOrder.ASC,
        limit: Optional[int] = None,
    ) -> List[Item]:
        return self._query(
            GSI1_PK_ATTR,
            GSI1_SK_ATTR,
            gsi_pk,
            gsi_sk_prefix,
            order,
            limit,
            index_name=GSI1_INDEX_NAME,
        )

    def update(self, pk: str, sk: str, field_ops: FieldOps, upsert: bool = False) -> Item:
        validate_field_ops(field_ops)
        table = self._ensure_table()
        key = {PK_ATTR: pk, SK_ATTR: sk}
        if not has_changes(field_ops):
            current = self.get(pk, sk)
            if current is not None:
                return current
            if not upsert:
                raise NotFoundError("갱신할 레코드가 없습니다.", pk=pk, sk=sk)
            self.put(dict(key))
            return dict(key)

        names: Dict[str, str] = {}
        values: Dict[str, Any] = {}
        set_clauses: List[str] = []
        remove_clauses: List[str] = []
        for position, (field_name, op) in enumerate(field_ops.items()):
            alias = f"#f{position}"
            if isinstance(op, SetField):
                names[alias] = field_name
                values[f":v{position}"] = _to_dynamo(op.value)
                set_clauses.append(f"{alias} = :v{position}")
            elif isinstance(op, RemoveField):
                names[alias] = field_name
                remove_clauses.append(alias)

        expression_parts = []
        if set_clauses:
            expression_parts.append("SET " + ", ".join(set_clauses))
        if remove_clauses:
            expression_parts.append("REMOVE " + ", ".join(remove_clauses))
        request: Dict[str, Any] = {
            "Key": key,
            "UpdateExpression": " ".join(expression_parts),
            "ExpressionAttributeNames": names,
            "ReturnValues": "ALL_NEW",
        }
        if values:
            request["ExpressionAttributeValues"] = values
        if not upsert:
            names["#pk"] = PK_ATTR
            request["ConditionExpression"] = "attribute_exists(#pk)"
        try:
            response = table.update_item(**request)
        except ClientError as error:
            if _error_code(error) == _CONDITIONAL_CHECK_FAILED:
                raise NotFoundError("갱신할 레코드가 없습니다.", original=error, pk=pk, sk=sk) from error
            raise
        return _from_dynamo(response.get("Attributes", {}))

    def delete(self, pk: str, sk: str) -> None:
        self._ensure_table().delete_item(Key={PK_ATTR: pk, SK_ATTR: sk})

    def _query(
        self,
        pk_attr: str,
        sk_attr: str,
        pk_value: str,
        sk_prefix: str,
        order: SortOrder,
        limit: Optional[int],
        index_name: Optional[str],
    ) -> List[Item]:
        table = self._ensure_table()
        request: Dict[str, Any] = {
            "KeyConditionExpression": "#pk = :pk",
            "ExpressionAttributeNames": {"#pk": pk_attr},
            "ExpressionAttributeValues": {":pk": pk_value},
            "ScanIndexForward": order == SortOrder.ASC,
        }
        if sk_prefix:
            request["KeyConditionExpression"] += " AND begins_with(#sk, :prefix)"
            request["ExpressionAttributeNames"]["#sk"] = sk_attr
            request["ExpressionAttributeValues"][":prefix"] = sk_prefix
        if index_name:
            request["IndexName"] = index_name

        items: List[Item] = []
        while True:
            if limit is not None:
                request["Limit"] = limit - len(items)
            response = table.query(**request)
            items.extend(_from_dynamo(item) for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key or (limit is not None and len(items) >= limit):
                break
            request["ExclusiveStartKey"] = last_key
        return items[:limit] if limit is not None else items

    def _ensure_table(self):
        if self._table is None:
            raise RuntimeError("DynamoDB 연결이 초기화되지 않았습니다.")
        return self._table
