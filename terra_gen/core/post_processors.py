"""
Post-processing and hydrology helpers shared by the generation levels.

This module implements:
- Orphan area and orphan terrain clean-up
- Tetris-footprint island stamping
- Mountain range carving
- Connected-water crawling and salt spreading
- River carving with confluence promotion
"""

from typing import Callable, Dict, List, Optional, Set

import structlog

from .alea_prng import AleaPRNG
from .climate import Climate
from .grid import CHEBYSHEV, Grid
from .snake import Acceptance, Compass, Snake
from .tetris import random_offsets
from .tile import GenTile, River
from .types import Palette

logger = structlog.get_logger()

MOUNTAIN_LEGS = (4, 5)
MOUNTAIN_TILES_PER_LEG = (3, 4)
MOUNTAIN_WATER_LIMIT = 3
SNOW_MOUNTAIN_CHANCE = 0.1

RIVER_LEGS = (9999,)
RIVER_TILES_PER_LEG = (2, 3, 4)


def remove_orphan_area(tile: GenTile, neighbors: List[GenTile], rng: AleaPRNG) -> None:
    """
    Give a tile whose area no neighbor shares the area of a random neighbor.

    Tiles surrounded only by the other domain (lakes, islands) are left alone.
    The tile's domain, climate and terrain follow the neighbor only when the
    domain changes and the tile may change domain; otherwise the neighbor is
    drawn from the tile's own domain.
    """
    if not neighbors:
        return

    has_same_area = any(n.area == tile.area for n in neighbors)
    all_diff_domain = all(n.domain != tile.domain for n in neighbors)
    if has_same_area or all_diff_domain:
        return

    ref = rng.pick(neighbors)
    if ref.domain != tile.domain:
        if not tile.can_change_domain():
            ref = rng.pick([n for n in neighbors if n.domain == tile.domain])
        else:
            tile.domain = ref.domain
            tile.climate = ref.climate
            tile.terrain = ref.terrain
            tile.is_salt = ref.is_salt
    tile.area = ref.area


def remove_orphan_terrain(
    tile: GenTile,
    neighbors: List[GenTile],
    rng: AleaPRNG,
    palette: Palette,
    ignore_lakes: bool = True,
) -> None:
    """
    Copy a random neighbor's terrain onto a tile no neighbor shares terrain with.

    Args:
        tile: Tile to fix
        neighbors: Its neighbors
        rng: Generation PRNG
        palette: Common types
        ignore_lakes: Never turn a lake into land or land into a lake
    """
    if not neighbors:
        return
    if any(n.terrain == tile.terrain for n in neighbors):
        return

    ref = rng.pick(neighbors)
    if ref.domain != tile.domain:
        if not tile.can_change_domain():
            return
        if ignore_lakes:
            from_lake = tile.terrain == palette.lake and ref.domain == palette.land
            to_lake = ref.terrain == palette.lake and tile.domain == palette.land
            if from_lake or to_lake:
                return
        tile.area = ref.area
    tile.domain = ref.domain
    tile.climate = ref.climate
    tile.terrain = ref.terrain


def make_island(
    grid: Grid,
    x: int,
    y: int,
    climate: Climate,
    palette: Palette,
    rng: AleaPRNG,
    hill_chance: float = 0.5,
) -> List[GenTile]:
    """
    Stamp a small tetris-shaped patch of land anchored at (x, y).

    Offsets outside the rows or failing ``can_change_domain()`` are skipped.
    Terrain follows the anchor tile's climate.

    Returns:
        Tiles converted to land
    """
    offsets = random_offsets(rng)
    elevation = palette.hill if rng.random() < hill_chance else palette.flat
    center = grid.get(x, y)

    stamped = []
    for dx, dy in offsets:
        tile = grid.get(x + dx, y + dy)
        if tile is None or not tile.can_change_domain():
            continue
        source = center or tile
        tile.domain = palette.land
        tile.terrain = climate.land_terrain(source.climate)
        tile.elevation = elevation
        tile.is_fresh = False
        tile.is_salt = False
        stamped.append(tile)
    return stamped


def mountain_range(
    start: GenTile,
    grid: Grid,
    palette: Palette,
    rng: AleaPRNG,
    initial_dir: Optional[Compass] = None,
) -> List[GenTile]:
    """
    Carve a mountain range with a snake walk.

    Each non-lake water tile entered counts against a limit; the walk halts
    before entering the third. Land tiles become mountains, or snow mountains
    when already mountainous or on a 10% roll.

    Returns:
        The walked tiles
    """
    water_count = 0

    def accept(tile: GenTile) -> Acceptance:
        nonlocal water_count
        if tile.is_water and tile.terrain != palette.lake:
            water_count += 1
            if water_count >= MOUNTAIN_WATER_LIMIT:
                return Acceptance.REJECT
        return Acceptance.ACCEPT

    def visit(tile: GenTile) -> None:
        if tile.is_water:
            return
        if palette.is_mountain(tile.elevation) or rng.random() < SNOW_MOUNTAIN_CHANCE:
            tile.elevation = palette.snow_mountain
        else:
            tile.elevation = palette.mountain

    return Snake(
        grid,
        rng,
        accept=accept,
        on_visit=visit,
        initial_dir=initial_dir,
        legs=MOUNTAIN_LEGS,
        tiles_per_leg=MOUNTAIN_TILES_PER_LEG,
    ).walk(start)


def crawl_tiles(
    grid: Grid,
    start: GenTile,
    seen: Set[str],
    is_valid: Callable[[GenTile], bool],
) -> List[GenTile]:
    """
    Depth-first crawl over 8-connected tiles satisfying ``is_valid``.

    Uses an explicit stack. ``seen`` holds tile keys and may be shared
    between calls so later crawls skip tiles an earlier one reached.
    """
    result: List[GenTile] = []
    if start is None or not is_valid(start):
        return result

    stack = [start]
    while stack:
        current = stack.pop()
        if current.key in seen:
            continue
        seen.add(current.key)
        result.append(current)

        for neighbor in grid.neighbors(current.x, current.y, CHEBYSHEV, 1):
            if neighbor.key in seen or not is_valid(neighbor):
                continue
            stack.append(neighbor)
    return result


def spread_salt(grid: Grid, start: GenTile, seen: Optional[Set[str]] = None) -> List[GenTile]:
    """Mark every water tile connected to ``start`` as salt."""
    visited = crawl_tiles(grid, start, seen if seen is not None else set(), lambda t: t.is_water)
    for tile in visited:
        tile.is_salt = True
    return visited


def _new_river_key(rivers: Dict[str, River]) -> str:
    n = len(rivers) + 1
    while f"river:{n}" in rivers:
        n += 1
    return f"river:{n}"


def make_river(
    start: GenTile,
    grid: Grid,
    palette: Palette,
    rng: AleaPRNG,
    rivers: Dict[str, River],
    initial_dir: Optional[Compass] = None,
) -> River:
    """
    Carve a river from ``start`` until it reaches salt water or another river.

    - Salt water halts the walk and is never part of the river.
    - A tile of a different river halts the walk; that river is promoted to a
      major river from the meeting tile down to its end.
    - Mountains and the river's own tiles are Blocked: the walk routes around
      them, or crosses when nothing else is possible.
    - Walked tiles get the river key and turn fresh, their neighbors turn
      fresh too, and featureless desert neighbors get a flood plain.
    - Once the river flows next to a lake it turns major for the rest of its
      course. A tile next to a lake no river runs through joins that lake.

    Args:
        start: Source tile
        grid: Level the river is carved on
        palette: Common types
        rng: Generation PRNG
        rivers: Registry of existing rivers by key; the new river is added

    Returns:
        The new river
    """
    river = River(_new_river_key(rivers))
    rivers[river.key] = river
    confluence: Optional[GenTile] = None
    major_mode = False

    def accept(tile: GenTile) -> Acceptance:
        nonlocal confluence
        confluence = None
        if tile.is_salt:
            return Acceptance.REJECT
        if tile.river_key is not None and tile.river_key != river.key:
            confluence = tile
            return Acceptance.REJECT
        if tile.river_key == river.key or palette.is_mountain(tile.elevation):
            return Acceptance.BLOCKED
        return Acceptance.ACCEPT

    def visit(tile: GenTile) -> None:
        nonlocal confluence, major_mode
        # Rejections seen while probing around a block do not end the river
        confluence = None
        tile.is_fresh = True
        if tile.river_key != river.key:
            tile.river_key = river.key
            river.tiles.append(tile)
        if major_mode:
            _make_major(tile, palette)

        for neighbor in grid.neighbors(tile.x, tile.y, CHEBYSHEV, 1):
            if neighbor.terrain != palette.lake:
                continue
            major_mode = True
            if neighbor.river_key is None and tile.can_change_domain():
                tile.domain = neighbor.domain
                tile.terrain = neighbor.terrain
                tile.elevation = neighbor.elevation
                tile.feature = None

    walked = Snake(
        grid,
        rng,
        accept=accept,
        on_visit=visit,
        initial_dir=initial_dir,
        legs=RIVER_LEGS,
        tiles_per_leg=RIVER_TILES_PER_LEG,
    ).walk(start)

    for tile in walked:
        for neighbor in grid.neighbors(tile.x, tile.y, CHEBYSHEV, 1):
            neighbor.is_fresh = True
            if neighbor.is_land and neighbor.feature is None and neighbor.terrain.id == "desert":
                neighbor.feature = palette.flood_plain

    if confluence is not None:
        other = rivers.get(confluence.river_key)
        if other is None:
            logger.warning("Confluence with unregistered river", river_key=confluence.river_key)
        else:
            promote_major_river(other, confluence, palette)

    logger.debug("River carved", key=river.key, tiles=len(river), merged=confluence is not None)
    return river


def promote_major_river(river: River, from_tile: GenTile, palette: Palette) -> List[GenTile]:
    """Mark ``river`` as major from ``from_tile`` to its end."""
    index = river.index_of(from_tile)
    if index == -1:
        return []

    promoted = river.tiles[index:]
    for tile in promoted:
        _make_major(tile, palette)
    return promoted


def _make_major(tile: GenTile, palette: Palette) -> None:
    """Major river land becomes major river terrain and loses its feature."""
    tile.is_major_river = True
    if tile.is_land:
        tile.terrain = palette.major_river
        tile.feature = None
