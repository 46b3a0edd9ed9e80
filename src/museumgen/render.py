from __future__ import annotations

from typing import Dict

from .layout.model import Cell

_GLYPHS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


def render_occupancy(occupied: Dict[Cell, int]) -> str:
    """Top-down text map of claimed cells, north up.

    The spawn module is drawn as '@', other modules by id (cycling through
    digits and letters), free cells as '.'.
    """
    if not occupied:
        return ""
    xs = [c[0] for c in occupied]
    zs = [c[1] for c in occupied]
    rows = []
    for z in range(max(zs), min(zs) - 1, -1):
        row = []
        for x in range(min(xs), max(xs) + 1):
            owner = occupied.get((x, z))
            if owner is None:
                row.append(".")
            elif owner == 0:
                row.append("@")
            else:
                row.append(_GLYPHS[owner % len(_GLYPHS)])
        rows.append("".join(row))
    return "\n".join(rows)
