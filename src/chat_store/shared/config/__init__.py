"""
목적: 설정 로더 공개 API를 제공한다.
설명: 일반 설정 병합 로더와 저장소 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/shared/config/loader.py, src/chat_store/shared/config/store_settings.py
"""

from chat_store.shared.config.loader import ConfigLoader
from chat_store.shared.config.store_settings import (
    StoreBackend,
    StoreSettings,
    load_store_settings,
)

__all__ = ["ConfigLoader", "StoreBackend", "StoreSettings", "load_store_settings"]
