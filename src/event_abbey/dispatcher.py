# src/event_abbey/dispatcher.py

from __future__ import annotations

import logging
from typing import Any

from .tasks.task_models import DispatchResult, Work
from .tasks.task_table import TaskTable

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    The only way new work enters the system.

    Safe to call from the bootstrap and from inside a running task; both go
    through the same capacity check.
    """

    def __init__(self, table: TaskTable) -> None:
        self._table = table

    def dispatch(self, work: Work, context: Any = None) -> DispatchResult:
        slot = self._table.allocate(work, context)
        if slot is None:
            logger.warning("Task table full (capacity=%d); dispatch rejected", self._table.capacity)
            return DispatchResult.FULL
        logger.debug("Task dispatched slot=%d work=%s", slot, getattr(work, "__name__", work))
        return DispatchResult.OK
