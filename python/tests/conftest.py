from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[2]
PYTHON_DIR = ROOT / "python"
sys.path.insert(0, str(PYTHON_DIR))

from underbar.scheduler import ManualScheduler, set_default_scheduler  # noqa: E402


@pytest.fixture
def scheduler() -> Iterator[ManualScheduler]:
    """Virtual-clock scheduler, also installed as the process default."""
    manual = ManualScheduler()
    set_default_scheduler(manual)
    try:
        yield manual
    finally:
        set_default_scheduler(None)


class Counter:
    """Callable that records every call it receives."""

    def __init__(self, func=None) -> None:
        self.func = func
        self.calls: list[tuple] = []

    def __call__(self, *args, **kwargs):
        self.calls.append(args if not kwargs else (args, kwargs))
        if self.func is None:
            return len(self.calls)
        return self.func(*args, **kwargs)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def counter():
    return Counter
