"""
Small polyomino footprints used to stamp islands and land patches.

70% of footprints are 3x3-centered shapes (T, L, I, N/Z, V) with 0-3 quarter
rotations; the rest are 2x2 shapes anchored at their top-left corner with a
random transpose and mirror.
"""

from typing import List, Tuple

from .alea_prng import AleaPRNG

Offset = Tuple[int, int]

SHAPES_3_CENTER: List[List[Offset]] = [
    [(0, 0), (-1, 0), (1, 0), (0, 1)],  # T
    [(0, 0), (0, 1), (0, 2), (1, 2)],  # L
    [(0, 0), (-1, 0), (1, 0)],  # I
    [(-1, 0), (0, 0), (0, 1), (1, 1)],  # N/Z
    [(0, 0), (-1, 1), (1, 1)],  # V
]

SHAPES_2_TOP_LEFT: List[List[Offset]] = [
    [(0, 0), (1, 0), (0, 1)],  # L triomino
    [(0, 0), (1, 0)],  # horizontal domino
    [(0, 0), (0, 1)],  # vertical domino
    [(0, 0), (1, 1)],  # diagonal pair
]


def rotate90(offsets: List[Offset], turns: int) -> List[Offset]:
    out = list(offsets)
    for _ in range(turns % 4):
        out = [(-dy, dx) for dx, dy in out]
    return out


def random_offsets(rng: AleaPRNG) -> List[Offset]:
    """A random footprint as (dx, dy) offsets from its anchor."""
    if rng.random() < 0.7:
        base = rng.pick(SHAPES_3_CENTER)
        return rotate90(base, rng.randint(0, 3))

    base = rng.pick(SHAPES_2_TOP_LEFT)
    transpose = rng.random() < 0.5
    mirror_x = rng.random() < 0.5
    mirror_y = rng.random() < 0.5
    out = []
    for dx, dy in base:
        if transpose:
            dx, dy = dy, dx
        out.append((1 - dx if mirror_x else dx, 1 - dy if mirror_y else dy))
    return out
