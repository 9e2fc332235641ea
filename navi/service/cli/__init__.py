"""Navi terminal client (package entrypoint).

Resolves settings (config file, env, flags), configures logging, builds the
runtime for the selected provider and hands it to the shell. It performs no
provider logic directly.
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.factory import UnknownProviderError
from ...base.logging import configure_logger
from ...config.errors import ConfigError
from ...config.settings import load_settings
from ..runtime import ChatRuntime
from .cli_parser import build_parser
from .cli_shell import handle_prompt, handle_shell
from .cli_utils import parse_verbosity


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, 1 failed reply, 2 configuration error).
    """
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)

    level = None
    if args.log_level:
        level = parse_verbosity(args.log_level)
        if level is None:
            print(f"error: invalid log level '{args.log_level}'", file=sys.stderr)
            return 2

    try:
        settings = load_settings(
            {
                "provider": args.provider,
                "model": args.model,
                "reasoning_effort": args.effort,
                "system_prompt": args.system_prompt,
                "log_file": args.log_file,
                "log_level": level,
            }
        )
        configure_logger(level=settings.log_level, file_path=settings.log_file)
        runtime = ChatRuntime.from_settings(settings)
    except (ConfigError, UnknownProviderError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    colors = not args.no_color and sys.stdout.isatty()
    if args.prompt is not None:
        return handle_prompt(runtime, args.prompt, colors=colors)
    return handle_shell(runtime, colors=colors, models=settings.models)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
