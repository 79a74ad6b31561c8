# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from event_abbey.abbey import DEFAULT_CYCLE_BUDGET
from event_abbey.config import Settings

_KEYS = (
    "ABBEY_APP_NAME",
    "ABBEY_LOG_LEVEL",
    "ABBEY_LOG_DIR",
    "ABBEY_WORKERS",
    "ABBEY_TASK_CAPACITY",
    "ABBEY_CYCLE_BUDGET",
    "ABBEY_KEEP_HISTORY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_match_demo_sizing() -> None:
    s = Settings.from_env()
    assert s.app_name == "abbey"
    assert s.log_level == "INFO"
    assert s.log_dir == Path(".local/abbey")
    assert (s.workers, s.task_capacity, s.cycle_budget) == (2, 4, DEFAULT_CYCLE_BUDGET)
    assert s.keep_history is True


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ABBEY_WORKERS", "3")
    monkeypatch.setenv("ABBEY_TASK_CAPACITY", "16")
    monkeypatch.setenv("ABBEY_CYCLE_BUDGET", "0")
    monkeypatch.setenv("ABBEY_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("ABBEY_LOG_LEVEL", "debug")

    s = Settings.from_env()

    assert (s.workers, s.task_capacity, s.cycle_budget) == (3, 16, 0)
    assert s.log_dir == tmp_path
    assert s.log_level == "debug"


def test_malformed_ints_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ABBEY_WORKERS", "many")
    monkeypatch.setenv("ABBEY_CYCLE_BUDGET", "  ")
    s = Settings.from_env()
    assert s.workers == 2
    assert s.cycle_budget == 8


def test_get_settings_reads_dotenv_once(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    from event_abbey import config

    (tmp_path / ".env").write_text("ABBEY_TASK_CAPACITY=9\n", "utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "_SETTINGS", None)
    try:
        first = config.get_settings()
        assert first.task_capacity == 9
        assert config.get_settings() is first
    finally:
        os.environ.pop("ABBEY_TASK_CAPACITY", None)


def test_real_env_wins_over_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    from event_abbey import config

    (tmp_path / ".env").write_text("ABBEY_WORKERS=9\n", "utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "_SETTINGS", None)
    monkeypatch.setenv("ABBEY_WORKERS", "1")

    assert config.get_settings().workers == 1


def test_keep_history_can_be_switched_off(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ABBEY_KEEP_HISTORY", "off")
    assert Settings.from_env().keep_history is False
