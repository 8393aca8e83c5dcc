"""
목적: 공통 계층 패키지를 제공한다.
설명: 로깅/예외/설정/대화 저장소 모듈을 하위 패키지로 묶는다.
디자인 패턴: 패키지 구조화
참조: src/chat_store/shared/chat, src/chat_store/shared/logging
"""
