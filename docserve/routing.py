"""Ordered request handler chain.

Each request path is offered to ``(predicate, handler)`` pairs in order.
A handler returns a response to finish the request or ``None`` to pass it
on; the fallback at the end always answers.
"""
from __future__ import annotations

import logging
import os
import posixpath
from typing import Callable, List, Mapping, Optional, Tuple

from flask import Response, has_request_context, redirect, render_template, request, send_from_directory
from werkzeug.exceptions import NotFound
from werkzeug.security import safe_join

from .config import HOME_TEMPLATE
from .logging_utils import log_suppressed

_log = logging.getLogger('docserve.routing')

Predicate = Callable[[str], bool]
Handler = Callable[[str], Optional[Response]]

INDEX_FILE = 'index.html'


class HandlerChain:
    def __init__(self, routes: List[Tuple[Predicate, Handler]] | None = None):
        self._routes: List[Tuple[Predicate, Handler]] = list(routes or [])

    def add(self, predicate: Predicate, handler: Handler) -> 'HandlerChain':
        self._routes.append((predicate, handler))
        return self

    def __len__(self) -> int:
        return len(self._routes)

    def dispatch(self, path: str):
        for predicate, handler in self._routes:
            if not predicate(path):
                continue
            resp = handler(path)
            if resp is not None:
                return resp
        raise LookupError(f'no handler produced a response for path {path!r}')


def is_root(path: str) -> bool:
    return path == '/'


def match_any(path: str) -> bool:
    return True


def home_handler(menu: Mapping) -> Handler:
    def render_home(path: str):
        return render_template(HOME_TEMPLATE, **menu)
    return render_home


def static_handler(doc_root: str) -> Handler:
    """Serve files under ``doc_root``; ``None`` when nothing matches.

    A directory is served through its ``index.html`` when it has one; a
    directory URL without the trailing slash is redirected to it first so
    relative links in the page resolve inside the directory.
    """
    root = os.path.abspath(doc_root)

    def serve_static(path: str):
        rel = path.lstrip('/')
        if not rel:
            return None
        target = safe_join(root, rel)
        if target is None:
            _log.debug('rejected unsafe static path=%s', path)
            return None
        if os.path.isdir(target):
            if not os.path.isfile(os.path.join(target, INDEX_FILE)):
                return None
            if not path.endswith('/'):
                return redirect(path + '/', code=308)
            rel = posixpath.join(rel, INDEX_FILE)
        try:
            return send_from_directory(root, rel)
        except NotFound:
            return None
        except OSError as e:
            log_suppressed(_log, e, 'static file unreadable')
            return None

    return serve_static


def raw_request_path(default: str) -> str:
    """Path as the client sent it (still percent-encoded), without the query.

    Uses the ``RAW_URI``/``REQUEST_URI`` keys WSGI servers add; ``default``
    when neither is present or the request target is not origin-form.
    """
    if not has_request_context():
        return default
    raw = request.environ.get('RAW_URI') or request.environ.get('REQUEST_URI')
    if not raw or not raw.startswith('/'):
        return default
    return raw.split('?', 1)[0]


def fallback_handler(path: str) -> Response:
    shown = raw_request_path(path)
    return Response(f"No static file with path '{shown}'!", status=404, mimetype='text/plain')


def build_handler_chain(doc_root: str, menu: Mapping) -> HandlerChain:
    """Home page, then static lookup, then the not-found message."""
    return HandlerChain([
        (is_root, home_handler(menu)),
        (match_any, static_handler(doc_root)),
        (match_any, fallback_handler),
    ])
