import sys
import pathlib

import pytest

# Ensure project root is on sys.path so 'import docserve' works when pytest runs
# from different working directories or when running individual tests.
_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from docserve import create_app
from docserve.config import Settings
from docserve.logging_utils import reset_suppressed_state


@pytest.fixture
def doc_root(tmp_path):
    """A doc root with three versions, some noise, and a few static files."""
    root = tmp_path / 'public'
    root.mkdir()
    for name in ('1.6', '1.9', '1.10', '1.10.0', 'latest', 'v2.0'):
        (root / name).mkdir()
    (root / '3.1').write_text('a file, not a version dir')
    (root / '1.10' / 'index.html').write_text('<h1>docs 1.10</h1>')
    (root / '1.10' / 'guide.txt').write_text('hello guide')
    (root / 'style.css').write_text('body { color: black; }')
    return root


@pytest.fixture
def app(doc_root):
    reset_suppressed_state()
    app = create_app(Settings(doc_root=str(doc_root)))
    app.testing = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
