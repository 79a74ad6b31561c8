# src/event_abbey/tasks/task_models.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

Work = Callable[[Any], Any]
# A task body: takes one opaque context, returns an (ignored) result.


class SlotState(StrEnum):
    """
    Task slot lifecycle.

    There is no RUNNING state: a task executes synchronously inside one worker
    turn, so nobody else can observe it half-way.
    """

    FREE = "free"
    READY = "ready"


class DispatchResult(StrEnum):
    OK = "ok"
    FULL = "full"


@dataclass(slots=True)
class TaskEntry:
    state: SlotState = SlotState.FREE
    work: Work | None = None
    context: Any = None

    def clear(self) -> None:
        self.state = SlotState.FREE
        self.work = None
        self.context = None
