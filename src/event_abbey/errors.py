# src/event_abbey/errors.py

"""
Exception taxonomy.

- A full task table is NOT an exception: dispatch reports it as DispatchResult.FULL.
- Contract violations are logic defects (double release, unknown worker id,
  re-entering a running scheduler). They subclass AssertionError so they read
  as failed invariants, and AbbeyError so callers can catch them as a group.
- Exhausting the cycle budget is the normal way a run ends, not an error.
"""

from __future__ import annotations


class AbbeyError(Exception):
    """Base class for everything raised by event_abbey itself."""


class ContractViolation(AbbeyError, AssertionError):
    """An internal invariant was broken by the caller or by a task."""


class DoubleReleaseError(ContractViolation):
    def __init__(self, slot: int) -> None:
        super().__init__(f"slot {slot} released while not READY")
        self.slot = slot


class UnknownWorkerError(ContractViolation):
    def __init__(self, worker_id: int, worker_count: int) -> None:
        super().__init__(f"unknown worker id {worker_id} (pool has {worker_count} workers)")
        self.worker_id = worker_id
        self.worker_count = worker_count


class ReentrantRunError(ContractViolation):
    """The scheduler was started twice, or from inside one of its own tasks."""


class ReentrantTurnError(ContractViolation):
    """A worker was resumed while a turn (its own or another worker's) was still running."""

    def __init__(self, worker_id: int, active_worker_id: int) -> None:
        super().__init__(f"worker {worker_id} resumed during the turn of worker {active_worker_id}")
        self.worker_id = worker_id
        self.active_worker_id = active_worker_id
