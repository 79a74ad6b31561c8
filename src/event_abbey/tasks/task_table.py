# src/event_abbey/tasks/task_table.py

from __future__ import annotations

import logging
from typing import Any

from ..errors import ContractViolation, DoubleReleaseError
from .task_models import SlotState, TaskEntry, Work

logger = logging.getLogger(__name__)


class TaskTable:
    """
    Fixed-capacity table of pending work.

    Slots are scanned lowest index first, both when allocating and when a
    worker looks for something to run. There is no priority beyond that:
    a freed low slot is reused before a higher one.

    Thread-safety:
    - none. The table is only ever touched by the single active context
      (bootstrap, or the worker currently running a turn).
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("task capacity must be >= 1")
        self._slots = [TaskEntry() for _ in range(capacity)]
        self._executing: int | None = None
        logger.debug("TaskTable ready capacity=%s", capacity)

    @property
    def capacity(self) -> int:
        return len(self._slots)

    # ---- producer side ----

    def allocate(self, work: Work, context: Any = None) -> int | None:
        """Install work in the first FREE slot. Returns the slot, or None when full."""
        if not callable(work):
            raise TypeError(f"work must be callable, got {type(work).__name__}")

        for i, entry in enumerate(self._slots):
            if entry.state is SlotState.FREE:
                entry.work = work
                entry.context = context
                entry.state = SlotState.READY
                logger.debug("Task put in slot %s", i)
                return i
        return None

    # ---- consumer side ----

    def take_ready(self) -> int | None:
        for i, entry in enumerate(self._slots):
            if entry.state is SlotState.READY:
                return i
        return None

    def execute(self, slot: int) -> Any:
        """Run the slot's work with its context. The slot stays READY until release()."""
        entry = self._entry(slot)
        if entry.state is not SlotState.READY or entry.work is None:
            raise ContractViolation(f"slot {slot} executed while not READY")
        if self._executing is not None:
            raise ContractViolation(f"slot {slot} executed while slot {self._executing} is still running")
        self._executing = slot
        try:
            return entry.work(entry.context)
        finally:
            self._executing = None

    def release(self, slot: int) -> None:
        entry = self._entry(slot)
        if entry.state is not SlotState.READY:
            raise DoubleReleaseError(slot)
        entry.clear()

    # ---- introspection ----

    @property
    def executing(self) -> int | None:
        """Slot whose work is running right now, if any."""
        return self._executing

    def state_of(self, slot: int) -> SlotState:
        return self._entry(slot).state

    def snapshot(self) -> list[SlotState]:
        return [entry.state for entry in self._slots]

    def ready_count(self) -> int:
        return sum(1 for entry in self._slots if entry.state is SlotState.READY)

    def is_full(self) -> bool:
        return self.ready_count() == self.capacity

    def _entry(self, slot: int) -> TaskEntry:
        if not 0 <= slot < len(self._slots):
            raise ContractViolation(f"slot {slot} out of range (capacity {len(self._slots)})")
        return self._slots[slot]
