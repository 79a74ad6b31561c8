# src/event_abbey/demo.py

"""
Demo workload.

A seed task is dispatched before the run starts; when a worker picks it up it
dispatches one increment task per counter. The increments only execute on
later turns, which is the point of the demo.

Counters are plain objects passed as task context, so their values survive
any number of suspensions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .core.ports import TaskSink
from .tasks.task_models import DispatchResult

logger = logging.getLogger(__name__)

DEFAULT_START_VALUES = (16, 19, 22)


@dataclass(slots=True)
class Counter:
    value: int = 0


@dataclass(slots=True)
class SeedContext:
    sink: TaskSink
    counters: list[Counter] = field(default_factory=list)
    rejected: int = 0


def increment(counter: Counter) -> int:
    counter.value += 1
    logger.info("The value is incremented to %d", counter.value)
    return counter.value


def seed(ctx: SeedContext) -> None:
    logger.info("Dispatch increment tasks")
    for counter in ctx.counters:
        if ctx.sink.dispatch(increment, counter) is DispatchResult.FULL:
            ctx.rejected += 1
    logger.info("Tasks dispatched; they execute on later turns")


def install_demo(sink: TaskSink, start_values: tuple[int, ...] = DEFAULT_START_VALUES) -> SeedContext:
    """Dispatch the seed task. Returns its context so callers can inspect the counters."""
    ctx = SeedContext(sink=sink, counters=[Counter(v) for v in start_values])
    if sink.dispatch(seed, ctx) is DispatchResult.FULL:
        logger.warning("Seed task could not be dispatched")
    return ctx
