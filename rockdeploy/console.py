"""Operator-facing console output and logging setup.

Step banners and summaries are printed; diagnostic detail goes through
module loggers configured by configure_logging().
"""

import logging
import os
import sys
import time
from collections.abc import Callable

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
RULE = "=" * 50


def configure_logging(level: str | None = None) -> None:
    """Configure console logging.

    Args:
        level: Log level name. Defaults to ROCKDEPLOY_LOG_LEVEL or INFO.
    """
    level_name = (level or os.environ.get("ROCKDEPLOY_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )


def format_size(size_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals."""
    return f"{size_bytes / 1024 / 1024:.2f} MB"


class StepTimer:
    """Numbered step banners with per-step durations.

    One instance belongs to one run; start times are keyed by step number.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started: dict[int, float] = {}
        self.durations: dict[int, float] = {}

    def start(self, step: int, message: str) -> None:
        """Record the start of a step and print its banner."""
        self._started[step] = self._clock()
        print(f"\n[STEP {step}] {message}")
        print(RULE)

    def complete(self, step: int, message: str) -> float:
        """Print the completion banner of a step.

        Returns:
            Seconds since start(step); 0.0 if the step was never started.
        """
        started = self._started.get(step)
        duration = self._clock() - started if started is not None else 0.0
        self.durations[step] = duration
        print(f"\n[STEP {step}] {message}")
        print(f"Duration: {duration:.2f} seconds")
        print(RULE)
        return duration


def success(message: str) -> None:
    print(f"OK  {message}")


def error(message: str) -> None:
    print(f"ERR {message}", file=sys.stderr)
