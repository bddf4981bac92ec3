import logging

from docserve.config import Settings
from docserve.logging_utils import (
    configure_logging,
    get_suppressed_snapshot,
    log_suppressed,
    reset_suppressed_state,
)


def test_log_suppressed_samples_then_throttles(caplog):
    reset_suppressed_state()
    logger = logging.getLogger('docserve.test')
    with caplog.at_level(logging.WARNING, logger='docserve.test'):
        for _ in range(5):
            log_suppressed(logger, OSError('boom'), 'ctx', sample=2, cooldown=3600)
    assert len([r for r in caplog.records if 'ctx' in r.getMessage()]) == 2
    assert get_suppressed_snapshot() == {'docserve.test:ctx': 5}
    reset_suppressed_state()
    assert get_suppressed_snapshot() == {}


def test_configure_logging_level_and_file(tmp_path):
    log_file = tmp_path / 'docserve.log'
    configure_logging(Settings(log_level='DEBUG', log_file=str(log_file)))
    configure_logging(Settings(log_level='DEBUG', log_file=str(log_file)))
    root = logging.getLogger()
    try:
        assert root.getEffectiveLevel() == logging.DEBUG
        handlers = [h for h in root.handlers if getattr(h, 'baseFilename', None) == str(log_file)]
        assert len(handlers) == 1
        logging.getLogger('docserve.test').info('written to file')
        handlers[0].flush()
        assert 'written to file' in log_file.read_text()
    finally:
        for h in [h for h in root.handlers if getattr(h, 'baseFilename', None) == str(log_file)]:
            root.removeHandler(h)
            h.close()
        configure_logging(Settings())


def test_unknown_level_falls_back_to_info():
    configure_logging(Settings(log_level='SILLY'))
    assert logging.getLogger().getEffectiveLevel() == logging.INFO
