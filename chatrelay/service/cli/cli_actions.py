"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``chatrelay``: resolve settings from flags, the
environment and the persisted config, read the prompt, then either print a
dry-run plan or send the request and write the reply to stdout.

Fallback & Error Semantics
--------------------------
- Errors are printed to stderr as one JSON object (``ProviderError.to_dict``).
- Failures while preparing the call (unknown provider, bad config, missing
  API key, no input) return ``2``; failures of the call itself return ``1``.
- Streamed text already written to stdout stays there when the stream aborts.

Side Effects
------------
Emits normalized ``cli.start`` / ``cli.finalize`` / ``cli.error`` events and
may perform network I/O through :class:`ChatClient`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional, TextIO

import httpx
from pydantic import ValidationError

from ...base.dto import ClientConfig
from ...base.errors import ConfigError, ErrorCode, ProviderError
from ...base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from ...base.models import Provider
from ...config import env as env_names
from ...config.app_config import AppConfig, config_file_path, load_app_config, save_app_config
from ...config.env import env_flag, env_str, get_env_var_name
from ...config.loader import get_client_config
from ..chat_client import ChatClient
from ..input_reader import read_prompt

EXIT_OK = 0
EXIT_RUNTIME = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


@dataclass(frozen=True)
class RunSettings:
    """Settings for one ``run`` after flags, env and config are merged."""

    provider: Provider
    model: str
    stream: bool
    verbose: bool
    pre_prompt: Optional[str]


def _print_error(payload: Dict[str, Any], err: Optional[TextIO] = None) -> None:
    print(json.dumps(payload, ensure_ascii=False), file=err or sys.stderr)


def _apply_logging(verbose: bool, log_file: Optional[str]) -> None:
    if verbose or log_file:
        configure_logger(level=logging.DEBUG if verbose else None, file_path=log_file)


def resolve_run_settings(args: argparse.Namespace, app_cfg: AppConfig, config: ClientConfig) -> RunSettings:
    """Merge ``run`` flags with the environment and the persisted config.

    Precedence per setting: flag, then environment, then config file. The
    model falls back to ``config``'s default for the chosen provider; aliases
    are expanded on whichever value wins.
    """
    provider = Provider.parse(args.provider or env_str(env_names.CHATRELAY_PROVIDER) or app_cfg.default_provider)
    default_model = config.default_model_for(provider)
    stream = args.stream if args.stream is not None else bool(env_flag(env_names.OPENROUTER_STREAM, False))
    verbose = bool(args.verbose) or bool(env_flag(env_names.OPENROUTER_VERBOSE, False))
    pre_prompt = args.pre_prompt if args.pre_prompt is not None else env_str(env_names.OPENROUTER_PRE_PROMPT)
    model = app_cfg.resolve_model(args.model or default_model) or default_model
    return RunSettings(provider=provider, model=model, stream=stream, verbose=verbose, pre_prompt=pre_prompt)


def plan_run(client: ChatClient, settings: RunSettings, prompt: str) -> Dict[str, Any]:
    """Return a JSON-serializable summary of the call without any I/O.

    The prepared request is included with credentials redacted.
    """
    prepared = client.prepare(prompt, settings.model, stream=settings.stream)
    return {
        "provider": settings.provider.value,
        "model": settings.model,
        "stream": settings.stream,
        "timeout_seconds": client.config.timeout_seconds,
        "api_key_present": bool(client.config.api_key),
        "request": prepared.to_dict(redact=True),
    }


def _missing_key_hint(provider: Provider) -> Dict[str, Any]:
    env_name = get_env_var_name(provider.value)
    return {
        "error": f"missing API key for provider '{provider.value}'",
        "code": ErrorCode.AUTH.value,
        "set_env": [env_name] if env_name else [],
    }


def _write_stream(client: ChatClient, settings: RunSettings, prompt: str, out: TextIO) -> str:
    stream = client.stream(prompt, settings.model)
    try:
        for chunk in stream:
            out.write(chunk)
            out.flush()
    finally:
        stream.close()
        if stream.chunk_count:
            out.write("\n")
            out.flush()
    return stream.text


def execute(client: ChatClient, settings: RunSettings, prompt: str, *, out: TextIO, err: TextIO) -> int:
    """Send the prompt and write the reply to ``out``.

    Returns ``0`` on success, ``1`` when the request or response fails and
    ``130`` when interrupted.
    """
    logger = get_logger(f"chatrelay.cli.{settings.provider.value}")
    ctx = LogContext(provider=settings.provider.value, model=settings.model, stream=settings.stream)
    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1)
    try:
        if settings.stream:
            text = _write_stream(client, settings, prompt, out)
        else:
            text = client.complete(prompt, settings.model)
            print(text, file=out)
    except ProviderError as exc:
        normalized_log_event(
            logger,
            "cli.error",
            ctx,
            phase="finalize",
            emitted=False,
            error_code=exc.code.value,
            error=exc.message,
        )
        _print_error(exc.to_dict(), err)
        return EXIT_RUNTIME
    except KeyboardInterrupt:
        normalized_log_event(logger, "cli.error", ctx, phase="finalize", emitted=False, error="interrupted")
        return EXIT_INTERRUPTED
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", emitted=bool(text), chars=len(text))
    return EXIT_OK


def handle_run(
    args: argparse.Namespace,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> int:
    """Execute the default ``run`` subcommand (dry-run plan or real call).

    ``stdin``/``stdout``/``stderr`` default to the process streams; the
    optional ``transport`` is handed to :class:`ChatClient`.
    """
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    try:
        app_cfg = load_app_config()
        config = get_client_config({"timeout_seconds": args.timeout}, app_config=app_cfg)
        settings = resolve_run_settings(args, app_cfg, config)
        _apply_logging(settings.verbose, args.log_file)
        prompt = read_prompt(
            args.file,
            args.prompt,
            stdin if stdin is not None else sys.stdin,
            max_file_size=app_cfg.max_file_size_bytes,
            pre_prompt=settings.pre_prompt,
        )
        client = ChatClient(settings.provider, config, transport=transport)
        if args.dry_run:
            print(json.dumps(plan_run(client, settings, prompt), ensure_ascii=False), file=out)
            return EXIT_OK
    except ProviderError as exc:
        _print_error(exc.to_dict(), err)
        return EXIT_USAGE

    if settings.provider.requires_api_key and not config.api_key:
        _print_error(_missing_key_hint(settings.provider), err)
        return EXIT_USAGE
    return execute(client, settings, prompt, out=out, err=err)


def _coerce_setting(cfg: AppConfig, key: str, value: str) -> AppConfig:
    data = cfg.model_dump()
    data[key] = value
    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid value for {key}: {value!r}", cause=exc) from exc


def handle_config(args: argparse.Namespace, *, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    """Execute ``config show|set|alias|unalias``."""
    out = stdout or sys.stdout
    try:
        cfg = load_app_config()
        if args.config_cmd == "show":
            payload = {"path": str(config_file_path()), **cfg.model_dump()}
            print(json.dumps(payload, ensure_ascii=False, indent=2), file=out)
            return EXIT_OK
        if args.config_cmd == "set":
            cfg = _coerce_setting(cfg, args.key, args.value)
        elif args.config_cmd == "alias":
            cfg = cfg.model_copy(update={"models": {**cfg.models, args.name.strip(): args.model.strip()}})
        elif args.config_cmd == "unalias":
            if args.name not in cfg.models:
                raise ConfigError(f"no alias named '{args.name}'")
            cfg = cfg.model_copy(update={"models": {k: v for k, v in cfg.models.items() if k != args.name}})
        path = save_app_config(cfg)
    except ProviderError as exc:
        _print_error(exc.to_dict(), stderr)
        return EXIT_USAGE
    print(json.dumps({"saved": str(path)}), file=out)
    return EXIT_OK


def handle_providers(args: argparse.Namespace, *, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:  # noqa: ARG001
    """Print one JSON object per provider with its resolved endpoint and model."""
    out = stdout or sys.stdout
    try:
        app_cfg = load_app_config()
        config = get_client_config(app_config=app_cfg)
    except ProviderError as exc:
        _print_error(exc.to_dict(), stderr)
        return EXIT_USAGE
    for provider in Provider:
        row = {
            "provider": provider.value,
            "url": config.url_for(provider),
            "default_model": config.default_model_for(provider),
            "streaming": "ndjson" if provider.streams_ndjson else "sse",
            "requires_api_key": provider.requires_api_key,
            "api_key_present": bool(config.api_key) if provider.requires_api_key else None,
        }
        print(json.dumps(row), file=out)
    return EXIT_OK


__all__ = [
    "RunSettings",
    "resolve_run_settings",
    "plan_run",
    "execute",
    "handle_run",
    "handle_config",
    "handle_providers",
]
