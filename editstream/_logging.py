"""
Opt-in logging for editstream.

The extractor and `Session` never print and stay silent by default. Pass
`logger=` to route messages into an application logger, or `log=True` to get
the named `editstream.*` loggers. A session re-parses its whole buffer on
every chunk, so its summary messages go through `OnceLogger`, which emits
each keyed message at most once until the session is reset.
"""
from __future__ import annotations

import logging
from typing import Set


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def _ensure_default_handler(lg: logging.Logger) -> None:
    # Let logs bubble to the root so pytest's caplog can capture them.
    lg.propagate = True


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Return a usable logger according to opt-in policy.

    - If `logger` is provided, use it.
    - Else if `enabled` is True, create/get a named logger.
    - Else return a NoopLogger that ignores calls.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "editstream")
        lg.setLevel(level)
        _ensure_default_handler(lg)
        return lg
    return NoopLogger()


class OnceLogger:
    """Wraps a resolved logger and emits each keyed message at most once."""

    def __init__(self, log: logging.Logger | NoopLogger):
        self._log = log
        self._seen: Set[str] = set()

    def once(self, key: str, level: str, msg: str, *args) -> bool:
        if key in self._seen:
            return False
        self._seen.add(key)
        getattr(self._log, level)(msg, *args)
        return True

    def clear(self) -> None:
        self._seen.clear()

    def __getattr__(self, item):
        return getattr(self._log, item)
