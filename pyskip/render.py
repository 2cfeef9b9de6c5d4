"""Text diagram of a skip list, for diagnostics only.

    Header
    * * *
    | | |
    X | |     a: 1
    | | |
    X X X     b: 2
    | | |
    * * *
    End of List

Each ``X`` is a level the node reaches, each ``|`` a level passing over it.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .skiplist import SkipList

__all__ = ["render"]


def render(skiplist: SkipList) -> str:
    width = skiplist.level
    stars = "* " * width
    rails = "| " * width
    lines = ["Header ", stars, rails]
    for node in skiplist._nodes():
        lines.append("X " * node.level + "| " * (width - node.level) + f"\t{node.key}: {node.value}")
        lines.append(rails)
    lines.append(stars)
    lines.append("End of List")
    return "\n".join(lines) + "\n"
