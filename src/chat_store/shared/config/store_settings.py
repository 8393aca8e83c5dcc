"""
목적: 대화 저장소 설정 모델과 로딩 함수를 제공한다.
설명: `.env`를 python-dotenv로 읽은 뒤 CHAT_STORE_* 환경 변수를 ConfigLoader로 병합해 StoreSettings를 만든다.
디자인 패턴: 설정 객체 + 빌더
참조: src/chat_store/shared/config/loader.py, src/chat_store/shared/chat/services/chat_store.py
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from chat_store.core.chat.const import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_SQLITE_PATH,
    DEFAULT_TABLE_NAME,
    MAX_CHATS,
    RETENTION_FETCH_LIMIT,
)
from chat_store.shared.config.loader import ConfigLoader
from chat_store.shared.logging import Logger, create_default_logger


class StoreBackend(str, Enum):
    """저장소 엔진 종류."""

    MEMORY = "memory"
    SQLITE = "sqlite"
    REDIS = "redis"
    DYNAMODB = "dynamodb"


class StoreSettings(BaseModel):
    """대화 저장소 설정이다.

    Args:
        backend: 사용할 키-값 엔진.
        table_name: 단일 테이블 이름(DynamoDB 테이블, SQLite 테이블, Redis 네임스페이스 기본값).
        sqlite_path: SQLite 파일 경로.
        redis_url: Redis 접속 URL.
        redis_namespace: Redis 키 접두사. 비우면 table_name을 쓴다.
        dynamodb_endpoint: DynamoDB 엔드포인트(로컬 DynamoDB 등).
        dynamodb_region: DynamoDB 리전.
        max_chats: 사용자별 최대 보관 대화 수.
        retention_fetch_limit: 보관 정책 계산 시 조회하는 최대 대화 수.
        default_list_limit: 대화 목록 기본 조회 수.
    """

    backend: StoreBackend = StoreBackend.MEMORY
    table_name: str = DEFAULT_TABLE_NAME
    sqlite_path: str = DEFAULT_SQLITE_PATH
    redis_url: str = "redis://127.0.0.1:6379/0"
    redis_namespace: Optional[str] = None
    dynamodb_endpoint: Optional[str] = None
    dynamodb_region: str = "us-east-1"
    max_chats: int = Field(default=MAX_CHATS, ge=1)
    retention_fetch_limit: int = Field(default=RETENTION_FETCH_LIMIT, ge=1)
    default_list_limit: int = Field(default=DEFAULT_LIST_LIMIT, ge=1)


def load_store_settings(
    env_file: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    logger: Optional[Logger] = None,
) -> StoreSettings:
    """환경 변수와 오버라이드를 병합해 StoreSettings를 생성한다.

    Args:
        env_file: 먼저 로드할 `.env` 경로. 이미 설정된 환경 변수는 덮어쓰지 않는다.
        overrides: 마지막에 적용할 값.
        environ: 테스트용 환경 변수 매핑. 주어지면 `.env` 로딩을 건너뛴다.
        logger: 주입 가능한 로거.
    """

    logger = logger or create_default_logger("StoreSettings")
    if environ is None and env_file:
        if Path(env_file).exists():
            load_dotenv(dotenv_path=env_file, override=False)
        else:
            logger.warning(f".env 파일이 없어 건너뜁니다: {env_file}")
    data = ConfigLoader(logger=logger, environ=environ).add_env().build(overrides)
    settings = StoreSettings.model_validate(data)
    logger.info(
        f"저장소 설정 로드 완료: backend={settings.backend.value}",
        table_name=settings.table_name,
    )
    return settings
