# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from event_abbey.abbey import Abbey, initialize
from event_abbey.logging_setup import _ConsoleNoiseFilter
from event_abbey.tasks.task_table import TaskTable

from .fakes import CallLog


@pytest.fixture()
def calls() -> CallLog:
    return CallLog()


@pytest.fixture()
def table() -> TaskTable:
    return TaskTable(3)


@pytest.fixture()
def abbey() -> Abbey:
    """Same sizing as the demo: 2 workers, 4 slots, 8 cycles."""
    return initialize(2, 4, cycle_budget=8)


def _installed_by_setup_logging(h: logging.Handler) -> bool:
    if isinstance(h, logging.FileHandler):
        return True
    return any(isinstance(f, _ConsoleNoiseFilter) for f in h.filters)


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    """Drop the handlers setup_logging() installs on the root logger."""
    root = logging.getLogger()
    saved_level = root.level
    yield
    for h in list(root.handlers):
        if _installed_by_setup_logging(h):
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)
    logging.captureWarnings(False)
