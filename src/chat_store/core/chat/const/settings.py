"""
목적: 대화 저장소 코어의 설정 상수를 정의한다.
설명: 테이블 이름, 보관 정책 상한, 목록 조회 기본값, 공유 식별자 길이를 제공한다.
디자인 패턴: 상수 객체 패턴
참조: src/chat_store/shared/chat/repositories/chat_repository.py, src/chat_store/shared/config/store_settings.py
"""

from __future__ import annotations

import os

# 단일 테이블 이름
DEFAULT_TABLE_NAME = os.getenv("CHAT_STORE_TABLE_NAME", "prompttoissue")
# SQLite 엔진 기본 파일 경로
DEFAULT_SQLITE_PATH = os.getenv("CHAT_STORE_SQLITE_PATH", "data/db/chat/chat_store.sqlite")

# 사용자별 최대 보관 대화 수. 초과분은 생성 시각이 오래된 순으로 삭제된다.
MAX_CHATS = 20
# 보관 정책 계산 시 한 번에 조회하는 최대 대화 수
RETENTION_FETCH_LIMIT = 100
# 대화 목록 기본 조회 수
DEFAULT_LIST_LIMIT = 50

# 공개 공유 식별자 길이(URL-safe 문자 수)
SHARE_ID_LENGTH = 12
# 포크된 대화 제목 접미사
FORK_TITLE_SUFFIX = " (Fork)"
