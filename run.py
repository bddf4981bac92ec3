import logging
import sys

from docserve import create_app
from docserve.config import load_settings
from docserve.exceptions import CatalogScanError, ConfigurationError

_log = logging.getLogger('docserve.run')


def main() -> int:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO)
        _log.error('[%s] %s', e.error_code, e.message)
        return 1
    try:
        app = create_app(settings)
    except CatalogScanError as e:
        _log.error('[%s] %s', e.error_code, e.message)
        return 1
    catalog = app.extensions['docserve'].catalog
    # Debug/reloader off by default; enable with DOCSERVE_DEBUG_SERVER=1
    _log.info('Serving %d doc versions from %s at http://%s:%d',
              len(catalog), settings.doc_root, settings.listen_address, settings.port)
    app.run(host=settings.listen_address, port=settings.port,
            debug=settings.debug_server, use_reloader=settings.debug_server)
    return 0


if __name__ == '__main__':
    sys.exit(main())
