"""
목적: 인메모리 엔진 모듈을 노출한다.
설명: InMemoryKeyValueEngine을 외부에 제공한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/kv/engines/memory/engine.py
"""

from chat_store.integrations.kv.engines.memory.engine import InMemoryKeyValueEngine

__all__ = ["InMemoryKeyValueEngine"]
