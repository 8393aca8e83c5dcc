"""
목적: 키-값 저장소 통합 모듈을 노출한다.
설명: EntityStore 파사드와 엔진 팩토리를 제공한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/kv/client.py, src/chat_store/integrations/kv/factory.py
"""

from chat_store.integrations.kv.client import EntityStore
from chat_store.integrations.kv.factory import build_engine

__all__ = ["EntityStore", "build_engine"]
