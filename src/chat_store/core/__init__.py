"""
목적: 코어 도메인 패키지를 제공한다.
설명: 대화 엔티티, 키 스키마, 상수를 하위 패키지로 묶는다.
디자인 패턴: 패키지 구조화
참조: src/chat_store/core/chat
"""
