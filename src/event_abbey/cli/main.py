# src/event_abbey/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds an Abbey sized from settings, dispatches the demo
seed task and starts scheduling. Does not return: the scheduler ends the
process once its cycle budget is spent.
"""

from __future__ import annotations

import logging

from ..abbey import initialize
from ..config import get_settings
from ..demo import install_demo
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    abbey = initialize(
        settings.workers,
        settings.task_capacity,
        cycle_budget=settings.cycle_budget,
        keep_history=settings.keep_history,
    )
    install_demo(abbey)
    logger.info("Main task dispatched")

    abbey.run()


if __name__ == "__main__":
    main()
