# tests/test_cli.py

from __future__ import annotations

from pathlib import Path

import pytest

from event_abbey.cli import main as cli_main
from event_abbey.config import Settings


def test_main_runs_demo_and_exits_cleanly(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, restore_root_logging
) -> None:
    settings = Settings(
        app_name="abbey-test",
        log_level="WARNING",
        log_dir=tmp_path,
        workers=2,
        task_capacity=4,
        cycle_budget=8,
    )
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    with pytest.raises(SystemExit) as exc:
        cli_main.main()

    assert exc.value.code == 0
    text = (tmp_path / "abbey.log").read_text("utf-8")
    assert "The value is incremented to 17" in text
    assert "Scheduler terminated cycles=8 tasks_executed=4" in text
