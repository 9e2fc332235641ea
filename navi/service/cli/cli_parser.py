"""CLI parser construction for ``navi``.

Argument shapes only; execution lives in ``cli_shell`` and the package
``main``. Flags left unset parse to ``None`` so configured values (config
file, ``NAVI_*`` env vars) are not clobbered.
"""

from __future__ import annotations

import argparse

from ...base.models import Effort
from ...config.defaults import SUPPORTED_PROVIDERS


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for the interactive shell and the one-shot ``--prompt`` mode.
    """
    p = argparse.ArgumentParser(prog="navi", description="Streaming chat client")
    p.add_argument("--provider", default=None, choices=SUPPORTED_PROVIDERS)
    p.add_argument("--model", default=None)
    p.add_argument(
        "--effort",
        default=None,
        choices=[e.value for e in Effort],
        help="Initial reasoning effort (cycle at runtime with /effort)",
    )
    p.add_argument("--system-prompt", default=None)
    p.add_argument("--prompt", default=None, help="Send one prompt, print the reply and exit")
    p.add_argument("--log-file", default=None)
    p.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR|CRITICAL (or synonyms)")
    p.add_argument("--no-color", action="store_true")
    return p


__all__ = ["build_parser"]
