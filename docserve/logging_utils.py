import logging
import threading
import time
from logging.handlers import RotatingFileHandler
from typing import Dict, Tuple

from .config import Settings

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_SuppressionKey = Tuple[str, str]
_SuppressionState = Dict[str, float | int]

_SUPPRESSION_LOCK = threading.Lock()
_SUPPRESSION_STATE: Dict[_SuppressionKey, _SuppressionState] = {}


def configure_logging(settings: Settings) -> None:
    """Set up root logging from settings; safe to call more than once."""
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    log = logging.getLogger('docserve')
    if settings.log_file:
        root = logging.getLogger()
        already = any(
            isinstance(h, RotatingFileHandler) and getattr(h, 'baseFilename', None) == settings.log_file
            for h in root.handlers
        )
        if not already:
            try:
                fh = RotatingFileHandler(settings.log_file, maxBytes=settings.log_max_bytes,
                                         backupCount=settings.log_backup_count)
            except OSError as e:
                log.warning('failed attaching RotatingFileHandler for %s err=%s', settings.log_file, e)
            else:
                fh.setLevel(level)
                fh.setFormatter(logging.Formatter(LOG_FORMAT))
                root.addHandler(fh)
                log.info('RotatingFileHandler attached path=%s max_bytes=%d backups=%d',
                         settings.log_file, settings.log_max_bytes, settings.log_backup_count)
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    log.info('Logging initialized at level %s', settings.log_level)


def log_suppressed(
    logger: logging.Logger,
    exc: Exception,
    context: str,
    *,
    level: int = logging.WARNING,
    sample: int = 5,
    cooldown: float = 60.0,
) -> int:
    """Log a repeated soft failure without flooding the log.

    The first ``sample`` occurrences for a ``(logger, context)`` pair are
    written; after that at most one line per ``cooldown`` seconds. Returns
    the running count for the pair, suppressed occurrences included.
    """
    now = time.time()
    key: _SuppressionKey = (logger.name, context)
    with _SUPPRESSION_LOCK:
        state = _SUPPRESSION_STATE.setdefault(key, {'count': 0, 'last_emit': 0.0})
        count = int(state['count']) + 1
        state['count'] = count
        emit = count <= sample or (now - float(state['last_emit'])) >= cooldown
        if emit:
            state['last_emit'] = now
    if emit:
        logger.log(level, '%s err=%s (seen=%d)', context, exc, count)
    return count


def get_suppressed_snapshot() -> Dict[str, int]:
    """Return per-context occurrence counts."""
    with _SUPPRESSION_LOCK:
        return {f'{name}:{context}': int(state['count'])
                for (name, context), state in _SUPPRESSION_STATE.items()}


def reset_suppressed_state() -> None:
    """Clear suppression counters. Useful for unit tests."""
    with _SUPPRESSION_LOCK:
        _SUPPRESSION_STATE.clear()
