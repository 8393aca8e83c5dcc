"""
목적: 대화 저장소 서비스 공개 API를 제공한다.
설명: ChatStore 조립 루트와 생성 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/shared/chat/services/chat_store.py
"""

from chat_store.shared.chat.services.chat_store import ChatStore, build_chat_store

__all__ = ["ChatStore", "build_chat_store"]
