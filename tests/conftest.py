"""
목적: pytest 공통 픽스처와 로깅 훅을 제공한다.
설명: 선택적 .env 로딩, 테스트 시작/종료 로깅, 인메모리 저장소와 고정 시계 픽스처를 제공한다.
디자인 패턴: 테스트 훅, 픽스처 팩토리
참조: pyproject.toml, src/chat_store/shared/chat/services/chat_store.py
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

import pytest
from dotenv import load_dotenv

from chat_store.integrations.kv import EntityStore
from chat_store.integrations.kv.engines.memory import InMemoryKeyValueEngine
from chat_store.shared.chat.services import ChatStore
from chat_store.shared.config import StoreSettings
from chat_store.shared.logging import InMemoryLogger

_LOGGER = logging.getLogger("tests")
_BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _load_env_files() -> None:
    """프로젝트 루트의 .env가 있으면 로딩한다."""

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)


_load_env_files()


class TickingClock:
    """호출할 때마다 step만큼 전진하는 테스트용 시계."""

    def __init__(self, start: datetime = _BASE_TIME, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def make_clock() -> Callable[..., TickingClock]:
    """TickingClock 생성 함수를 반환한다."""

    return TickingClock


@pytest.fixture
def clock() -> TickingClock:
    """1초씩 전진하는 시계를 반환한다."""

    return TickingClock()


@pytest.fixture
def logger() -> InMemoryLogger:
    """stdout 출력이 꺼진 인메모리 로거를 반환한다."""

    return InMemoryLogger(name="tests", emit_stdout=False)


@pytest.fixture
def entity_store(logger: InMemoryLogger) -> EntityStore:
    """인메모리 엔진 기반 EntityStore를 반환한다."""

    store = EntityStore(InMemoryKeyValueEngine(logger=logger), logger=logger)
    store.connect()
    store.ensure_table()
    return store


@pytest.fixture
def chat_store(entity_store: EntityStore, logger: InMemoryLogger, clock: TickingClock) -> ChatStore:
    """인메모리 엔진과 고정 시계로 조립한 ChatStore를 반환한다."""

    return ChatStore(entity_store, settings=StoreSettings(), logger=logger, clock=clock)


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
