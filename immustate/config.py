"""
Container settings, optionally sourced from environment variables.

Recognised variables (a ``.env`` file in the working directory supplies
defaults; explicit environment variables win):

- ``IMMUSTATE_LEGACY_TRUTHINESS``: treat any falsy state as "no value" in ``apply``
- ``IMMUSTATE_LOG_LEVEL``: DEBUG, INFO, WARNING, ERROR or CRITICAL
- ``IMMUSTATE_STRUCTURED_LOGS``: emit JSON log lines
- ``IMMUSTATE_COLORED_LOGS``: colorize console output
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


@dataclass(frozen=True)
class ContainerConfig:
    """Behavior and logging knobs for a container.

    ``ImmutableContainer`` only reads ``legacy_truthiness``. The logging
    fields are consumed by ``log_config.configure_from``, so one loaded
    config can drive both.
    """

    legacy_truthiness: bool = False  # apply() ignores every falsy state, not just None
    log_level: str = 'INFO'
    structured_logs: bool = False
    colored_logs: bool = True

    def __post_init__(self):
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f'log_level must be one of {", ".join(LOG_LEVELS)}, got {self.log_level!r}')


def load_config(env: Mapping[str, str] | None = None) -> ContainerConfig:
    """
    Build a ContainerConfig from environment variables.

    Args:
        env: Optional mapping for testability. Defaults to os.environ
            merged with a ``.env`` file, if present.

    Raises:
        ValueError: If a variable holds a malformed value
    """
    source = _with_dotenv_defaults(os.environ) if env is None else env

    return ContainerConfig(
        legacy_truthiness=_parse_bool(source.get('IMMUSTATE_LEGACY_TRUTHINESS'), 'IMMUSTATE_LEGACY_TRUTHINESS', False),
        log_level=(_clean_str(source.get('IMMUSTATE_LOG_LEVEL')) or 'INFO').upper(),
        structured_logs=_parse_bool(source.get('IMMUSTATE_STRUCTURED_LOGS'), 'IMMUSTATE_STRUCTURED_LOGS', False),
        colored_logs=_parse_bool(source.get('IMMUSTATE_COLORED_LOGS'), 'IMMUSTATE_COLORED_LOGS', True),
    )


def _with_dotenv_defaults(env: Mapping[str, str], path: Path = Path('.env')) -> Mapping[str, str]:
    dotenv = _read_dotenv(path)
    if not dotenv:
        return env
    merged = dict(env)
    for key, value in dotenv.items():
        merged.setdefault(key, value)
    return merged


def _read_dotenv(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        raw = path.read_text(encoding='utf-8')
    except OSError:
        return {}

    parsed: dict[str, str] = {}
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith('#') or '=' not in stripped:
            continue
        if stripped.startswith('export '):
            stripped = stripped[len('export ') :].lstrip()
        key, value = stripped.split('=', 1)
        key = key.strip()
        if key:
            parsed[key] = _parse_dotenv_value(value)
    return parsed


def _parse_dotenv_value(raw: str) -> str:
    value = raw.strip()
    if not value:
        return ''
    quote = value[0]
    if quote in {'"', "'"}:
        if len(value) >= 2 and value[-1] == quote:
            return value[1:-1]
        return value[1:]

    for idx, char in enumerate(value):
        if char == '#' and idx > 0 and value[idx - 1].isspace():
            value = value[:idx].rstrip()
            break
    return value


def _clean_str(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _parse_bool(raw: str | None, key: str, default: bool) -> bool:
    cleaned = _clean_str(raw)
    if cleaned is None:
        return default
    lowered = cleaned.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f'{key} must be a boolean (true/false), got {raw!r}')
