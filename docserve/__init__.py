import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from flask import Flask

from .config import Settings, load_settings
from .logging_utils import configure_logging
from .menu import make_menu_data
from .routing import HandlerChain, build_handler_chain
from .versions import scan_catalog

__version__ = '0.1.0'


@dataclass(frozen=True)
class DocServerState:
    catalog: Tuple[str, ...]
    menu: Mapping
    chain: HandlerChain


def create_app(settings: Optional[Settings] = None):
    """Build the Flask app.

    The doc root is scanned here, once; a scan failure raises
    CatalogScanError and no app is returned.
    """
    if settings is None:
        settings = load_settings()
    configure_logging(settings)
    log = logging.getLogger(__name__)

    catalog = scan_catalog(settings.doc_root)
    menu = make_menu_data(catalog)

    # the doc root is the only static folder
    app = Flask(__name__, static_folder=None)
    app.extensions['docserve'] = DocServerState(
        catalog=catalog,
        menu=menu,
        chain=build_handler_chain(settings.doc_root, menu),
    )

    from .routes.docs import docs_bp
    app.register_blueprint(docs_bp)

    log.info('docserve ready doc_root=%s versions=%d', settings.doc_root, len(catalog))
    return app
