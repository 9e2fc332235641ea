# -*- coding: utf-8 -*-
"""Utility helpers shared by the terminal shell.

Functions
---------
- ``parse_verbosity(value)``: Map user strings and synonyms to a canonical
  logging level name.
- ``suppress_console_logs()``: Context manager to temporarily detach console
  handlers while preserving file handlers, avoiding interleaved JSON logs
  during streaming output.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Iterator, List, Optional, Tuple

from ...base.logging import BASE_LOGGER_NAME

_FILE_HANDLER_ATTR = "_navi_file_handler"


def parse_verbosity(value: str) -> Optional[str]:
    """Parse a user-provided verbosity string into a canonical level.

    Accepted values (case-insensitive):
    - Canonical: DEBUG, INFO, WARNING, ERROR, CRITICAL
    - Synonyms: verbose->DEBUG; low->INFO; med/medium/warn->WARNING;
      high/error/err/quiet->ERROR; critical/crit/silent->CRITICAL

    Returns
    -------
    Optional[str]
        Canonical upper-cased level, or ``None`` if invalid.
    """
    v = value.strip().lower()
    mapping = {
        "debug": "DEBUG",
        "verbose": "DEBUG",
        "info": "INFO",
        "low": "INFO",
        "warning": "WARNING",
        "warn": "WARNING",
        "medium": "WARNING",
        "med": "WARNING",
        "error": "ERROR",
        "err": "ERROR",
        "high": "ERROR",
        "quiet": "ERROR",
        "critical": "CRITICAL",
        "crit": "CRITICAL",
        "silent": "CRITICAL",
    }
    if v in mapping:
        return mapping[v]
    canon = value.strip().upper()
    if canon in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return canon
    return None


def _navi_loggers() -> List[logging.Logger]:
    found: List[logging.Logger] = [logging.getLogger(BASE_LOGGER_NAME)]
    placeholder = getattr(logging, "PlaceHolder", None)
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(name, str) or not name.startswith(BASE_LOGGER_NAME + "."):
            continue
        if placeholder is not None and isinstance(logger, placeholder):
            continue
        found.append(logging.getLogger(name))
    return found


@contextlib.contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Temporarily detach console handlers of the ``navi`` logger tree.

    Session lifecycle events are logged at INFO while a reply streams; this
    keeps them from interleaving with the text printed by the shell.

    Behavior
    --------
    - Only console handlers (stderr/stdout) are affected.
    - Managed file handlers (tagged with ``_navi_file_handler``) stay attached.
    - Original handlers are restored on exit.
    """
    detached: List[Tuple[logging.Logger, logging.Handler]] = []
    try:
        for lg in _navi_loggers():
            for handler in list(lg.handlers):
                if getattr(handler, _FILE_HANDLER_ATTR, False):
                    continue
                if isinstance(handler, logging.StreamHandler):
                    handler.flush()
                    detached.append((lg, handler))
                    lg.removeHandler(handler)
        yield
    finally:
        for lg, handler in detached:
            lg.addHandler(handler)


__all__ = ["parse_verbosity", "suppress_console_logs"]
