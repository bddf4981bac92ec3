"""Version directory discovery.

The documentation root holds one directory per published version, named
``<major>.<minor>`` (``1.10``, not ``1.10.0``). This module finds them and
orders them newest first.
"""
from __future__ import annotations

import logging
import os
import re
import stat
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .exceptions import CatalogScanError

_log = logging.getLogger('docserve.versions')

# Only the final path segment counts; a patch component is not recognised.
VERSION_DIR_RE = re.compile(r'(?:^|[/\\])([0-9]+)\.([0-9]+)$')


@dataclass(frozen=True)
class VersionEntry:
    major: int
    minor: int

    @property
    def label(self) -> str:
        return f'{self.major}.{self.minor}'

    def sort_key(self) -> Tuple[int, int]:
        return (self.major, self.minor)


def parse_version_dir(path: str | os.PathLike) -> VersionEntry | None:
    """Return the version encoded by the last segment of ``path``, or None."""
    m = VERSION_DIR_RE.search(os.fspath(path))
    if not m:
        return None
    # [0-9]+ groups always convert
    return VersionEntry(int(m.group(1)), int(m.group(2)))


def list_version_dirs(root: str | os.PathLike) -> List[VersionEntry]:
    """Return version entries for the immediate child directories of ``root``.

    Raises OSError when ``root`` is missing, unreadable or not a directory,
    and when a child's metadata cannot be read.
    """
    entries: List[VersionEntry] = []
    with os.scandir(root) as it:
        for child in it:
            # stat errors (entry removed mid-scan, dangling symlink) propagate
            if not stat.S_ISDIR(os.stat(child.path).st_mode):
                _log.debug('skipping non-directory path=%s', child.path)
                continue
            entry = parse_version_dir(child.path)
            if entry is None:
                _log.debug('skipping non-version directory path=%s', child.path)
                continue
            entries.append(entry)
    return entries


def sort_versions(entries: Iterable[VersionEntry]) -> List[VersionEntry]:
    """Sort ascending by (major, minor), compared numerically."""
    return sorted(entries, key=VersionEntry.sort_key)


def get_versions(root: str | os.PathLike) -> Tuple[str, ...]:
    """Return version labels newest first, e.g. ``('1.10', '1.9', '1.6')``."""
    versions = sort_versions(list_version_dirs(root))
    versions.reverse()
    return tuple(v.label for v in versions)


def scan_catalog(root: str) -> Tuple[str, ...]:
    """Build the catalog once at startup, wrapping filesystem errors."""
    try:
        catalog = get_versions(root)
    except OSError as e:
        raise CatalogScanError(root, e) from e
    _log.info('version catalog built root=%s count=%d versions=%s', root, len(catalog), list(catalog))
    return catalog
