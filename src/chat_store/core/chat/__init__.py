"""
목적: 대화 코어 패키지를 제공한다.
설명: 엔티티 모델, 키 스키마, 아이템 매퍼, 상수를 묶는다.
디자인 패턴: 패키지 구조화
참조: src/chat_store/core/chat/models, src/chat_store/core/chat/utils
"""
