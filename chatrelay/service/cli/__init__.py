"""``chatrelay`` command-line entrypoint.

Argument shapes live in ``cli_parser`` and handlers in ``cli_actions``; this
module only dispatches. ``run`` is the default subcommand, so
``chatrelay -p "hi"`` and ``echo hi | chatrelay --stream`` both work.
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, Optional

from .cli_actions import handle_config, handle_providers, handle_run, plan_run
from .cli_parser import SUBCOMMANDS, build_parser

_HANDLERS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "run": handle_run,
    "config": handle_config,
    "providers": handle_providers,
}


def _with_default_command(argv: list[str]) -> list[str]:
    # Top-level help stays reachable; everything else defaults to ``run``.
    if argv and (argv[0] in SUBCOMMANDS or argv[0] in ("-h", "--help")):
        return argv
    return ["run", *argv]


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, 1 request failure, 2 usage or input
        error, 130 interrupted).
    """
    args = build_parser().parse_args(_with_default_command(list(sys.argv[1:] if argv is None else argv)))
    return _HANDLERS[args.cmd](args)


__all__ = ["main", "plan_run"]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
