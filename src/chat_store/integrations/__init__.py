"""
목적: 외부 저장소 통합 패키지를 제공한다.
설명: 키-값 저장소 엔진과 공통 클라이언트를 하위 패키지로 묶는다.
디자인 패턴: 패키지 구조화
참조: src/chat_store/integrations/kv
"""
