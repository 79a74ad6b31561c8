# src/event_abbey/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by tasks.

Tasks only see a TaskSink: whatever can accept more work. In practice this is
an Abbey or its Dispatcher, but tests pass fakes.
"""

from typing import Any, Protocol

from ..tasks.task_models import DispatchResult, Work


class TaskSink(Protocol):
    def dispatch(self, work: Work, context: Any = None) -> DispatchResult: ...
