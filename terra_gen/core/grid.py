"""
Grid and neighbor geometry shared by every resolution level.

X wraps around the world; Y is hard-bounded (no polar wrap). Each level keeps
its tiles in a dense numpy object array indexed ``[y, x]``.
"""

from typing import TYPE_CHECKING, Iterator, List, NamedTuple, Optional

import numpy as np

if TYPE_CHECKING:
    from .tile import GenTile

CHEBYSHEV = "chebyshev"
MANHATTAN = "manhattan"
NEIGHBOR_METHODS = (CHEBYSHEV, MANHATTAN)


class Coords(NamedTuple):
    """A coordinate pair, also used for level sizes."""

    x: int
    y: int


class TileMissingError(LookupError):
    """A coordinate expected to be populated holds no tile."""


def get_neighbor_coords(
    x: int,
    y: int,
    method: str = CHEBYSHEV,
    distance: int = 1,
    size: Coords = Coords(1, 1),
) -> List[Coords]:
    """
    Neighbor coordinates of (x, y) within a level.

    Args:
        x: Column of the center tile
        y: Row of the center tile
        method: "chebyshev" (square radius) or "manhattan" (diamond radius)
        distance: Radius in tiles
        size: Level size (width, height)

    Returns:
        Deduplicated coordinates, excluding (x, y) itself. X wraps modulo the
        level width, rows outside [0, height) are dropped.
    """
    if method not in NEIGHBOR_METHODS:
        raise ValueError(f"Unknown neighbor method '{method}'")

    neighbors: List[Coords] = []
    seen = set()
    for dy in range(-distance, distance + 1):
        ny = y + dy
        if ny < 0 or ny >= size.y:
            continue

        for dx in range(-distance, distance + 1):
            if method == MANHATTAN and abs(dx) + abs(dy) > distance:
                continue

            nx = (x + dx) % size.x
            if nx == x and ny == y:
                continue
            if (nx, ny) in seen:
                continue

            seen.add((nx, ny))
            neighbors.append(Coords(nx, ny))
    return neighbors


def get_real_coords(x: int, y: int, size: Coords) -> Optional[Coords]:
    """Wrap X into the level; None when Y falls outside it."""
    if y < 0 or y >= size.y:
        return None
    return Coords(x % size.x, y)


class Grid:
    """Dense tile storage for one resolution level."""

    def __init__(self, name: str, size: Coords):
        if size.x <= 0 or size.y <= 0:
            raise ValueError(f"Grid '{name}' needs a positive size, got {tuple(size)}")
        self.name = name
        self.size = Coords(int(size.x), int(size.y))
        self._tiles = np.empty((self.size.y, self.size.x), dtype=object)

    @property
    def width(self) -> int:
        return self.size.x

    @property
    def height(self) -> int:
        return self.size.y

    def get(self, x: int, y: int) -> Optional["GenTile"]:
        """Tile at (x, y) with X wrapped, or None if out of rows or empty."""
        coords = get_real_coords(x, y, self.size)
        if coords is None:
            return None
        return self._tiles[coords.y, coords.x]

    def require(self, x: int, y: int) -> "GenTile":
        tile = self.get(x, y)
        if tile is None:
            raise TileMissingError(f"{self.name}[{x}, {y}] does not exist")
        return tile

    def set(self, tile: "GenTile") -> "GenTile":
        """Store a tile at its own coordinates, replacing any previous one."""
        if not (0 <= tile.x < self.width and 0 <= tile.y < self.height):
            raise IndexError(f"{self.name}[{tile.x}, {tile.y}] is outside {tuple(self.size)}")
        self._tiles[tile.y, tile.x] = tile
        return tile

    def has(self, x: int, y: int) -> bool:
        return self.get(x, y) is not None

    def neighbors(self, x: int, y: int, method: str = CHEBYSHEV, distance: int = 1) -> List["GenTile"]:
        """Populated neighbor tiles, see ``get_neighbor_coords``."""
        out = []
        for c in get_neighbor_coords(x, y, method, distance, self.size):
            tile = self._tiles[c.y, c.x]
            if tile is not None:
                out.append(tile)
        return out

    def empty_coords(self) -> List[Coords]:
        """Row-major list of coordinates that hold no tile."""
        ys, xs = np.nonzero(self._tiles == None)  # noqa: E711
        return [Coords(int(x), int(y)) for y, x in zip(ys, xs)]

    def is_complete(self) -> bool:
        return len(self) == self.width * self.height

    def __iter__(self) -> Iterator["GenTile"]:
        """Populated tiles in row-major order."""
        for tile in self._tiles.flat:
            if tile is not None:
                yield tile

    def __len__(self) -> int:
        return int(np.count_nonzero(self._tiles != None))  # noqa: E711

    def __repr__(self) -> str:
        return f"Grid({self.name}, {self.width}x{self.height}, tiles={len(self)})"
