from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

MenuContext = Mapping[str, Tuple[Mapping[str, str], ...]]


def make_menu_data(versions: Iterable[str]) -> MenuContext:
    """Return the home template context.

    e.g. ``{'versions': ({'version': '1.10'}, {'version': '1.9'}, {'version': '1.6'})}``

    Order is kept exactly as given; the catalog is already newest first.
    Every level is read-only since one context is shared by all requests.
    """
    return MappingProxyType({
        'versions': tuple(MappingProxyType({'version': v}) for v in versions),
    })
