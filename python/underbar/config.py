from __future__ import annotations

import os

from .errors import ConfigurationError

_PREFIX = "UNDERBAR_"
_SCHEDULERS = frozenset(("realtime", "asyncio"))


class UnderbarConfig:
    """Settings read from ``UNDERBAR_*`` environment variables."""

    __slots__ = ("_env",)

    def __init__(self, env=None) -> None:
        self._env = os.environ if env is None else env

    def _lookup(self, key: str, default: str) -> str:
        value = self._env.get(_PREFIX + key)
        if value is None or not value.strip():
            return default
        return value.strip()

    @property
    def log_level(self) -> str:
        return self._lookup("LOG_LEVEL", "WARNING").upper()

    @property
    def scheduler(self) -> str:
        name = self._lookup("SCHEDULER", "realtime").lower()
        if name not in _SCHEDULERS:
            raise ConfigurationError(
                f"unknown scheduler {name!r} (expected one of: {', '.join(sorted(_SCHEDULERS))})"
            )
        return name


def load_config(env=None) -> UnderbarConfig:
    return UnderbarConfig(env)
