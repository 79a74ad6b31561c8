# src/event_abbey/abbey.py

"""
The Abbey: one owning object for a whole scheduler system.

Lifecycle:
    abbey = initialize(workers, capacity)   # allocate pool + table
    abbey.dispatch(work, ctx)               # zero or more times
    abbey.run()                             # never returns: SystemExit(0)

Nothing is process-global, so several abbeys can live side by side (tests do).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, NoReturn

from .dispatcher import Dispatcher
from .scheduler import RunReport, Scheduler
from .tasks.task_models import DispatchResult, Work
from .tasks.task_table import TaskTable
from .workers.worker import WorkerPool

logger = logging.getLogger(__name__)

DEFAULT_CYCLE_BUDGET = 8


@dataclass(slots=True)
class Abbey:
    table: TaskTable
    pool: WorkerPool
    scheduler: Scheduler
    dispatcher: Dispatcher

    def dispatch(self, work: Work, context: Any = None) -> DispatchResult:
        return self.dispatcher.dispatch(work, context)

    def run_cycles(self) -> RunReport:
        """Boot the workers and cycle until the budget is spent. Returns a report."""
        logger.info("The abbey is started")
        return self.scheduler.run()

    def run(self) -> NoReturn:
        """Like run_cycles(), then end the process with status 0."""
        report = self.run_cycles()
        logger.info("Just quit after %d scheduled cycles", report.cycles)
        raise SystemExit(0)


def _check_count(name: str, value: int, *, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def initialize(
    worker_count: int,
    task_capacity: int,
    *,
    cycle_budget: int = DEFAULT_CYCLE_BUDGET,
    keep_history: bool = True,
) -> Abbey:
    _check_count("worker_count", worker_count, minimum=1)
    _check_count("task_capacity", task_capacity, minimum=1)
    _check_count("cycle_budget", cycle_budget, minimum=0)

    table = TaskTable(task_capacity)
    pool = WorkerPool(worker_count, table)
    logger.info(
        "The abbey is initialized with %d workers and a buffer for %d tasks",
        worker_count,
        task_capacity,
    )
    return Abbey(
        table=table,
        pool=pool,
        scheduler=Scheduler(pool, cycle_budget=cycle_budget, keep_history=keep_history),
        dispatcher=Dispatcher(table),
    )


def dispatch(abbey: Abbey, work: Work, context: Any = None) -> DispatchResult:
    return abbey.dispatch(work, context)
