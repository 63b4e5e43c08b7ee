from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"
_LEVEL_ENV_VARS = ("RENEWDASH_LOG_LEVEL",)
_DEBUG_FLAGS = ("RENEWDASH_DEBUG",)
# Third-party loggers that flood DEBUG output.
_NOISY_LOGGERS = ("urllib3", "watchfiles", "uvicorn.access")


def _coerce_level(value: Optional[str], fallback: int) -> int:
    if not value:
        return fallback
    text = value.strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    upper = text.upper()
    if hasattr(logging, upper):
        candidate = getattr(logging, upper)
        if isinstance(candidate, int):
            return candidate
    return fallback


def _env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def resolve_env_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    env = os.environ if environ is None else environ
    for var in _LEVEL_ENV_VARS:
        value = env.get(var)
        if value:
            return _coerce_level(value, logging.INFO)
    if any(_env_truthy(env.get(flag)) for flag in _DEBUG_FLAGS):
        return logging.DEBUG
    return None


def configure_root(
    default_level: int | str = logging.INFO,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Configure the root logger with a compact format.

    Environment overrides:
      - RENEWDASH_LOG_LEVEL: explicit log level (name or number)
      - RENEWDASH_DEBUG: truthy -> DEBUG
    """
    fallback = (
        _coerce_level(default_level, logging.INFO)
        if isinstance(default_level, str)
        else int(default_level)
    )
    env_level = resolve_env_level(environ)
    effective = env_level if env_level is not None else fallback

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)
    root.setLevel(effective)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
    return effective


def level_name(level: int) -> str:
    """Return logging level name for diagnostics."""
    return logging.getLevelName(level)
