"""PySkip: an ordered string map built on Pugh's skip list.

The container lives in :mod:`pyskip.skiplist`; :mod:`pyskip.render` draws it
and :mod:`pyskip.cli` drives it from a command script.
"""

from __future__ import annotations

__all__ = [
    "SkipList",
    "NotFound",
]

from .skiplist import NotFound, SkipList
