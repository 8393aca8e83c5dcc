"""
목적: DynamoDB 엔진 모듈을 노출한다.
설명: DynamoDBKeyValueEngine을 외부에 제공한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/kv/engines/dynamodb/engine.py
"""

from chat_store.integrations.kv.engines.dynamodb.engine import DynamoDBKeyValueEngine

__all__ = ["DynamoDBKeyValueEngine"]
