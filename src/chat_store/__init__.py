"""
목적: 대화 영속성 계층 패키지를 제공한다.
설명: 대화/메시지 로그 저장, 사용자별 보관 한도, 공개 공유와 포크, 사용자 설정 저장을 단일 키-값 테이블 위에서 수행한다.
디자인 패턴: 계층형 패키지(core/integrations/shared)
참조: src/chat_store/shared/chat/services/chat_store.py
"""
