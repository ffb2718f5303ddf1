"""Argument parser for the ``chatrelay`` command.

Only argument shapes live here; handlers are in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ...base.models import Provider

CONFIG_KEYS = ("default_provider", "default_model", "timeout_seconds", "max_file_size_bytes")
SUBCOMMANDS = frozenset({"run", "config", "providers"})


def _str2bool(v: str | None) -> bool:
    """Map common truthy/falsey strings to bool (``None`` means ``True``)."""
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    if val in {"0", "f", "false", "n", "no", "off"}:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got '{v}'")


def _positive_float(v: str) -> float:
    try:
        val = float(v)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a number of seconds, got '{v}'") from exc
    if val <= 0:
        raise argparse.ArgumentTypeError("timeout must be positive")
    return val


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream [BOOL]`` / ``--no-stream``; omitted leaves ``None``."""
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, help="stream the reply as it arrives")
    grp.add_argument("--no-stream", dest="stream", action="store_false", help="wait for the complete reply")
    parser.set_defaults(stream=None)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``run``, ``config`` and ``providers``."""
    p = argparse.ArgumentParser(
        prog="chatrelay",
        description="Send a prompt to OpenRouter, Ollama or an OpenAI-compatible local server.",
    )
    sub = p.add_subparsers(dest="cmd")

    providers = ", ".join(m.value for m in Provider)
    p_run = sub.add_parser("run", help="send a prompt (default subcommand)")
    p_run.add_argument("--provider", default=None, help=f"one of: {providers}")
    p_run.add_argument("-m", "--model", default=None, help="model id or alias")
    p_run.add_argument("-p", "--prompt", default=None, help="prompt text (otherwise --file or stdin)")
    p_run.add_argument("-f", "--file", default=None, help="read the prompt from a file")
    add_stream_flags(p_run)
    p_run.add_argument("--timeout", type=_positive_float, default=None, help="overall timeout in seconds")
    p_run.add_argument("--pre-prompt", default=None, help="text prepended to the prompt")
    p_run.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    p_run.add_argument("--log-file", default=None, help="also write logs to this file")
    p_run.add_argument("--dry-run", action="store_true", help="print the prepared request and exit")

    p_cfg = sub.add_parser("config", help="show or change the persisted configuration")
    cfg_sub = p_cfg.add_subparsers(dest="config_cmd")
    cfg_sub.add_parser("show", help="print the configuration as JSON")
    p_set = cfg_sub.add_parser("set", help="set a configuration value")
    p_set.add_argument("key", choices=CONFIG_KEYS)
    p_set.add_argument("value")
    p_alias = cfg_sub.add_parser("alias", help="add or replace a model alias")
    p_alias.add_argument("name")
    p_alias.add_argument("model")
    p_unalias = cfg_sub.add_parser("unalias", help="remove a model alias")
    p_unalias.add_argument("name")
    p_cfg.set_defaults(config_cmd="show")

    sub.add_parser("providers", help="list providers, endpoints and default models")
    return p


__all__ = ["build_parser", "add_stream_flags", "CONFIG_KEYS", "SUBCOMMANDS"]
