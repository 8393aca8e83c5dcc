"""
목적: 저장소 설정 로딩을 검증한다.
설명: 기본 값, 환경 변수 병합, 오버라이드 우선순위, .env 로딩, JSON 설정 병합을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/chat_store/shared/config/store_settings.py, src/chat_store/shared/config/loader.py
"""

from __future__ import annotations

import json
import os

import pytest
from pydantic import ValidationError

from chat_store.shared.config import ConfigLoader, StoreBackend, StoreSettings, load_store_settings


def test_defaults() -> None:
    settings = load_store_settings(environ={})

    assert settings.backend == StoreBackend.MEMORY
    assert settings.table_name == "prompttoissue"
    assert settings.max_chats == 20
    assert settings.retention_fetch_limit == 100
    assert settings.default_list_limit == 50


def test_environment_and_overrides(logger) -> None:
    environ = {
        "CHAT_STORE_BACKEND": "redis",
        "CHAT_STORE_REDIS_URL": "redis://cache:6379/1",
        "CHAT_STORE_MAX_CHATS": "5",
        "UNRELATED": "x",
    }

    settings = load_store_settings(environ=environ, overrides={"max_chats": 7}, logger=logger)

    assert settings.backend == StoreBackend.REDIS
    assert settings.redis_url == "redis://cache:6379/1"
    assert settings.max_chats == 7


def test_env_file_is_loaded(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("CHAT_STORE_BACKEND=sqlite\n", encoding="utf-8")
    monkeypatch.delenv("CHAT_STORE_BACKEND", raising=False)

    try:
        settings = load_store_settings(env_file=str(env_file))
    finally:
        os.environ.pop("CHAT_STORE_BACKEND", None)

    assert settings.backend == StoreBackend.SQLITE


def test_invalid_limits_are_rejected() -> None:
    with pytest.raises(ValidationError):
        StoreSettings(max_chats=0)


def test_config_loader_merges_json_and_env(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"retention": {"max_chats": 3, "fetch": 10}}), encoding="utf-8")

    merged = (
        ConfigLoader(environ={"CHAT_STORE_RETENTION__MAX_CHATS": "4"})
        .add_json_file(str(config_path), required=True)
        .add_env()
        .build()
    )

    assert merged == {"retention": {"max_chats": 4, "fetch": 10}}
