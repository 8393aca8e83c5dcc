"""
목적: 공통 상수 집합을 제공한다.
설명: 설정 로딩과 저장소 구성에서 공유하는 기본 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/chat_store/shared/config/loader.py, src/chat_store/shared/config/store_settings.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 기본 파일 인코딩.
        ENV_NESTED_DELIMITER: 환경 변수 키를 중첩 경로로 해석하는 구분자.
        ENV_PREFIX: 저장소 설정 환경 변수 접두사.
        TRUTHY_VALUES: 참으로 해석하는 문자열 집합.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_NESTED_DELIMITER = "__"
    ENV_PREFIX = "CHAT_STORE_"
    TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})


__all__ = ["SharedConst"]
