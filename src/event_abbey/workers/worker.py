# src/event_abbey/workers/worker.py

from __future__ import annotations

"""
Workers ("monks").

Each worker owns one generator that plays the role of a captured execution
context. Entering the worker primes the generator up to its first yield; every
resume is a single send() that runs exactly one turn and lands back on the
same yield.

Anything that has to outlive a suspension is kept on the Worker object itself.
The generator body keeps no frame locals across its yield.
"""

import logging
from collections.abc import Generator, Iterator
from dataclasses import dataclass

from ..errors import ContractViolation, ReentrantTurnError, UnknownWorkerError
from ..tasks.task_table import TaskTable

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActiveTurn:
    """Which worker is mid-turn. Shared by every worker of a pool."""

    worker_id: int | None = None


class Worker:
    def __init__(self, worker_id: int, table: TaskTable, active: ActiveTurn | None = None) -> None:
        self.id = worker_id
        self._table = table
        self._active = active if active is not None else ActiveTurn()
        self._continuation: Generator[None, None, None] | None = None

        self.turns = 0
        self.tasks_executed = 0
        self.last_slot: int | None = None

    @property
    def entered(self) -> bool:
        return self._continuation is not None

    def enter(self) -> None:
        """First entry: capture the continuation and hand control straight back."""
        if self._continuation is not None:
            raise ContractViolation(f"worker {self.id} entered twice")
        self._continuation = self._loop()
        next(self._continuation)
        logger.debug("Initialized worker nr. %s", self.id)

    def resume(self) -> int | None:
        """
        Run one turn. Returns the slot that was executed, or None when
        the worker found no ready work.
        """
        if self._continuation is None:
            raise ContractViolation(f"worker {self.id} resumed before being entered")
        if self._active.worker_id is not None:
            raise ReentrantTurnError(self.id, self._active.worker_id)

        self._active.worker_id = self.id
        try:
            self._continuation.send(None)
        finally:
            self._active.worker_id = None
        return self.last_slot

    def _loop(self) -> Generator[None, None, None]:
        while True:
            yield

            self.turns += 1
            self.last_slot = self._table.take_ready()
            if self.last_slot is None:
                logger.debug("Worker %s: no task found", self.id)
                continue

            logger.debug("Worker %s executes task at slot %s", self.id, self.last_slot)
            # Result is discarded: tasks are fire-and-forget.
            self._table.execute(self.last_slot)
            self._table.release(self.last_slot)
            self.tasks_executed += 1


class WorkerPool:
    """Fixed-size set of workers sharing one TaskTable."""

    def __init__(self, size: int, table: TaskTable) -> None:
        if size < 1:
            raise ValueError("worker count must be >= 1")
        self.active = ActiveTurn()
        self._workers = [Worker(i, table, self.active) for i in range(size)]

    def __len__(self) -> int:
        return len(self._workers)

    def __iter__(self) -> Iterator[Worker]:
        return iter(self._workers)

    def __getitem__(self, worker_id: int) -> Worker:
        if isinstance(worker_id, bool) or not 0 <= worker_id < len(self._workers):
            raise UnknownWorkerError(worker_id, len(self._workers))
        return self._workers[worker_id]

    def enter_all(self) -> None:
        for worker in self._workers:
            worker.enter()

    def tasks_executed(self) -> int:
        return sum(w.tasks_executed for w in self._workers)
