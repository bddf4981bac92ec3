"""Environment-driven settings.

Everything is read from ``os.environ`` (or a mapping passed in by tests)
once, when the application is created.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

DOC_ROOT = 'public'
LISTEN_ADDRESS = '0.0.0.0'
DEFAULT_PORT = '6767'
HOME_TEMPLATE = 'home.html'


@dataclass(frozen=True)
class Settings:
    doc_root: str = DOC_ROOT
    listen_address: str = LISTEN_ADDRESS
    port: int = int(DEFAULT_PORT)
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    log_max_bytes: int = 5 * 1024 * 1024
    log_backup_count: int = 5
    debug_server: bool = False


def _int_setting(env: Mapping[str, str], name: str, default: str, *, minimum: int = 0, maximum: int | None = None) -> int:
    raw = env.get(name, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(name, f'expected an integer, got {raw!r}') from None
    if value < minimum or (maximum is not None and value > maximum):
        raise ConfigurationError(name, f'{value} out of range')
    return value


def get_server_port(env: Mapping[str, str] | None = None) -> int:
    """Listen port from ``PORT`` (Heroku style), else the default."""
    env = os.environ if env is None else env
    return _int_setting(env, 'PORT', DEFAULT_PORT, minimum=0, maximum=65535)


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if env is None else env
    level_name = env.get('DOCSERVE_LOG_LEVEL', 'INFO').upper()
    return Settings(
        doc_root=env.get('DOCSERVE_DOC_ROOT') or DOC_ROOT,
        port=get_server_port(env),
        log_level=level_name,
        log_file=env.get('DOCSERVE_LOG_FILE') or None,
        log_max_bytes=_int_setting(env, 'DOCSERVE_LOG_MAX_BYTES', str(5 * 1024 * 1024)),
        log_backup_count=_int_setting(env, 'DOCSERVE_LOG_BACKUP_COUNT', '5'),
        debug_server=env.get('DOCSERVE_DEBUG_SERVER', '0') == '1',
    )
