"""
D4 symmetries of a square board (8 transforms).

Rotations: 0°, 90°, 180°, 270°
Reflections: horizontal, vertical, main diagonal, anti-diagonal

Used to reduce boards to a canonical key so symmetric positions share one
entry in the opponent's transposition table.
"""

from functools import lru_cache
from typing import List, Tuple

import torch

from .board import Board


def _idx(r: int, c: int, n: int) -> int:
    """Convert (row, col) to flat index."""
    return r * n + c


@lru_cache(maxsize=None)
def symmetry_maps(n: int = 3) -> torch.Tensor:
    """
    Build the 8 permutation maps for an n x n board.

    Returns:
        [8, n*n] long tensor; row k maps each target index to its source index
    """
    last = n - 1
    maps = []
    for k in range(8):
        mp = [0] * (n * n)
        for r in range(n):
            for c in range(n):
                if k == 0:   rt, ct = r, c                  # identity
                elif k == 1: rt, ct = c, last - r           # rotate 90
                elif k == 2: rt, ct = last - r, last - c    # rotate 180
                elif k == 3: rt, ct = last - c, r           # rotate 270
                elif k == 4: rt, ct = r, last - c           # reflect horizontal
                elif k == 5: rt, ct = last - r, c           # reflect vertical
                elif k == 6: rt, ct = c, r                  # reflect main diag
                else:        rt, ct = last - c, last - r    # reflect anti-diag
                mp[_idx(rt, ct, n)] = _idx(r, c, n)
        maps.append(mp)
    return torch.tensor(maps, dtype=torch.long)


# Pre-computed maps for the standard board
SYM_MAPS = symmetry_maps(3)


def _side(cells: List[int]) -> int:
    n = int(round(len(cells) ** 0.5))
    if n * n != len(cells):
        raise ValueError(f"Symmetries need a square board, got {len(cells)} cells.")
    return n


def apply_symmetry_board(cells: List[int], sym_id: int) -> List[int]:
    """
    Apply symmetry transform to flat board cells.

    Args:
        cells: row-major owner values
        sym_id: symmetry ID (0-7)

    Returns:
        Transformed cells
    """
    mp = symmetry_maps(_side(cells))[sym_id]
    return torch.tensor(cells, dtype=torch.long).index_select(0, mp).tolist()


def get_all_symmetries(cells: List[int]) -> List[List[int]]:
    """Return all 8 symmetric versions of the cells."""
    maps = symmetry_maps(_side(cells))
    return torch.tensor(cells, dtype=torch.long)[maps].tolist()


def canonical_key(board: Board) -> Tuple[int, ...]:
    """
    Smallest symmetric encoding of the board.

    Boards that are rotations or reflections of each other share the key.
    Non-square boards have no symmetry reduction and use their own cells.
    """
    cells = board.cells()
    if board.size.rows != board.size.columns:
        return tuple(cells)
    return min(tuple(v) for v in get_all_symmetries(cells))
