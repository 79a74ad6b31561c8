# src/event_abbey/scheduler.py

from __future__ import annotations

"""
Round-robin scheduler.

Phases:
- IDLE        -> constructed, not started
- BOOTING     -> every worker is entered once, in id order, so each captures
                 its continuation without doing any work
- CYCLING     -> while budget remains: decrement, advance the cursor, resume
                 that worker; control comes back here when it suspends
- TERMINATED  -> budget exhausted (or a task raised)

Fairness is purely positional. The scheduler does not care whether a worker
did anything on its turn.

With keep_history=True (the default) every turn is kept as a TurnRecord, so
memory grows linearly with the cycle budget. Long runs should pass
keep_history=False; cycle and task counts are tracked either way.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from .errors import ReentrantRunError
from .workers.worker import WorkerPool

logger = logging.getLogger(__name__)


class SchedulerPhase(StrEnum):
    IDLE = "idle"
    BOOTING = "booting"
    CYCLING = "cycling"
    TERMINATED = "terminated"


@dataclass(slots=True, frozen=True)
class TurnRecord:
    cycle: int
    worker_id: int
    slot: int | None

    @property
    def did_work(self) -> bool:
        return self.slot is not None


@dataclass(slots=True, frozen=True)
class RunReport:
    cycles: int
    tasks_executed: int
    history: tuple[TurnRecord, ...]

    def worker_sequence(self) -> list[int]:
        return [t.worker_id for t in self.history]


class Scheduler:
    def __init__(self, pool: WorkerPool, *, cycle_budget: int, keep_history: bool = True) -> None:
        if cycle_budget < 0:
            raise ValueError("cycle budget must be >= 0")
        self._pool = pool
        self.cycle_budget = cycle_budget
        self.cycles_remaining = cycle_budget
        self.current_worker: int | None = None
        self.phase = SchedulerPhase.IDLE
        self.keep_history = keep_history
        self.history: list[TurnRecord] = []
        self.cycles_run = 0
        self.tasks_executed = 0

    def run(self) -> RunReport:
        if self.phase is not SchedulerPhase.IDLE:
            raise ReentrantRunError(f"scheduler already {self.phase.value}")

        self.phase = SchedulerPhase.BOOTING
        logger.info("Initializing %d workers", len(self._pool))
        self._pool.enter_all()

        self.phase = SchedulerPhase.CYCLING
        logger.info("Start scheduling budget=%d", self.cycle_budget)
        try:
            while self.cycles_remaining > 0:
                self.cycles_remaining -= 1
                self._turn()
        except Exception:
            logger.exception(
                "Task failed on worker %s; terminating after %d cycles",
                self.current_worker,
                self.cycles_run,
            )
            raise
        finally:
            self.phase = SchedulerPhase.TERMINATED

        report = self.report()
        logger.info(
            "Scheduler terminated cycles=%d tasks_executed=%d",
            report.cycles,
            report.tasks_executed,
        )
        return report

    def report(self) -> RunReport:
        return RunReport(
            cycles=self.cycles_run,
            tasks_executed=self.tasks_executed,
            history=tuple(self.history),
        )

    def _turn(self) -> None:
        if self.current_worker is None:
            self.current_worker = 0
        else:
            self.current_worker = (self.current_worker + 1) % len(self._pool)

        worker = self._pool[self.current_worker]
        logger.debug("Jump to worker %d", worker.id)
        slot = worker.resume()
        if self.keep_history:
            self.history.append(TurnRecord(cycle=self.cycles_run, worker_id=worker.id, slot=slot))
        self.cycles_run += 1
        if slot is not None:
            self.tasks_executed += 1
