"""
Game level: the playable grid, each regional tile split into 3x3 game tiles.

This module implements:
- Filling game tiles from nearby regional tiles with elevation/feature variety
- Orphan fixes, foothills, oasis/atoll placement and small islands
- Final start placement
- Salt/fresh water classification (coast, sea, lake)
- River carving
- Feature sanity clean-up
"""

import math
from typing import TYPE_CHECKING, Dict, List, Set

import structlog

from .grid import CHEBYSHEV, get_neighbor_coords
from .post_processors import (
    make_island,
    make_river,
    remove_orphan_area,
    remove_orphan_terrain,
    spread_salt,
)
from .tile import START_KINDS, GenTile

if TYPE_CHECKING:
    from .terra_generator import TerraGenerator

logger = structlog.get_logger()

# Land elevation roll: below FLAT is flat, below SWAP swaps flat/hill, else inherited
ELEVATION_FLAT = 0.5
ELEVATION_SWAP = 0.7
FEATURE_SWAP_CHANCE = 0.25

FOOTHILL_CHANCE = 0.5
ATOLL_FLAT_CHANCE = 0.5
ATOLL_HILL_CHANCE = 0.75
ISLAND_CHECK_CHANCE = 0.1
ISLAND_AREA_RADIUS = 3
SEA_ISLAND_HILL_CHANCE = 0.75
LAKE_ISLAND_HILL_CHANCE = 0.25

RIVER_SALT_DISTANCE = 3
RIVER_SPACING = 3
TILES_PER_RIVER_ROW = 12

DEFERRED_FEATURES = ("oasis", "atoll")
FLAT_ONLY_FEATURES = ("oasis", "floodPlain", "swamp")
OCEAN_FEATURES = ("tradeWind", "ice")
WATER_FEATURES = ("ice", "kelp", "lagoon", "atoll", "tradeWind")


class GameLevel:
    """Generation steps for the game level, chained in order."""

    def __init__(self, gen: "TerraGenerator"):
        self.gen = gen
        self.grid = gen.game_tiles
        self.palette = gen.palette
        self.rng = gen.rng

    def fill_from_reg(self) -> "GameLevel":
        """Create every game tile from a random regional tile around it."""
        size = self.gen.game_size
        for y in range(size.y):
            for x in range(size.x):
                parent = self.gen.reg_from_game_coords(x, y)
                if not parent.is_start:
                    candidates = [parent] + [
                        self.gen.reg_from_game_coords(c.x, c.y)
                        for c in get_neighbor_coords(x, y, CHEBYSHEV, 1, size)
                    ]
                    parent = self.rng.pick(candidates)

                tile = GenTile(
                    x=x,
                    y=y,
                    domain=parent.domain,
                    area=parent.area,
                    climate=parent.climate,
                    terrain=parent.terrain,
                    elevation=self._elevation_from(parent),
                )

                deferred = parent.feature is not None and parent.feature.id in DEFERRED_FEATURES
                if not deferred:
                    if self.rng.random() < FEATURE_SWAP_CHANCE:
                        tile.feature = None if parent.feature else self.gen.feature_for_tile(tile, size.y)
                    else:
                        tile.feature = parent.feature

                self.grid.set(tile)

        return self

    def _elevation_from(self, parent: GenTile):
        if parent.is_water:
            return self.palette.flat

        roll = self.rng.random()
        if roll < ELEVATION_FLAT:
            return self.palette.flat
        if roll < ELEVATION_SWAP:
            return self.palette.hill if parent.elevation == self.palette.flat else self.palette.flat
        return parent.elevation

    def post_process(self) -> "GameLevel":
        return (
            self.smooth_and_decorate()
            .place_starts()
            .spread_salt()
            .set_salt_fresh_effects()
            .set_sea_between_coast_and_ocean()
            .add_rivers()
            .fix_invalid_features()
        )

    def smooth_and_decorate(self) -> "GameLevel":
        """Orphan fixes, mountain foothills, oasis/atoll placement and small islands."""
        for tile in self.grid:
            neighbors = self.grid.neighbors(tile.x, tile.y, CHEBYSHEV, 1)

            remove_orphan_area(tile, neighbors, self.rng)
            remove_orphan_terrain(tile, neighbors, self.rng, self.palette)

            if tile.elevation == self.palette.mountain:
                for n in neighbors:
                    if n.elevation == self.palette.flat and self.rng.random() < FOOTHILL_CHANCE:
                        n.elevation = self.palette.hill
            elif tile.elevation == self.palette.snow_mountain:
                for n in neighbors:
                    if n.elevation in (self.palette.flat, self.palette.hill):
                        n.elevation = self.palette.hill if self.rng.random() < FOOTHILL_CHANCE else self.palette.mountain

            if tile.x % 3 == 1 and tile.y % 3 == 1 and self._place_deferred_feature(tile, neighbors):
                continue

            if tile.terrain in (self.palette.sea, self.palette.lake) and self.rng.random() < ISLAND_CHECK_CHANCE:
                area = self.grid.neighbors(tile.x, tile.y, CHEBYSHEV, ISLAND_AREA_RADIUS)
                if all(n.terrain == tile.terrain for n in area):
                    hill_chance = SEA_ISLAND_HILL_CHANCE if tile.terrain == self.palette.sea else LAKE_ISLAND_HILL_CHANCE
                    make_island(self.grid, tile.x, tile.y, self.gen.climate, self.palette, self.rng, hill_chance)

        return self

    def _place_deferred_feature(self, tile: GenTile, neighbors: List[GenTile]) -> bool:
        """Place a regional oasis or atoll within the 3x3 group centered on ``tile``."""
        reg = self.gen.reg_from_game_coords(tile.x, tile.y)
        if reg.feature is None or reg.feature.id not in DEFERRED_FEATURES:
            return False

        group = [tile] + neighbors
        if reg.feature.id == "oasis":
            land = [t for t in group if t.is_land]
            if land:
                self.rng.pick(land).feature = reg.feature
            return True

        if self.rng.random() < ATOLL_FLAT_CHANCE:
            if tile.can_change_domain():
                tile.domain = self.palette.land
                tile.terrain = self.gen.land_terrain(tile.climate)
                tile.elevation = self.palette.flat
                tile.is_salt = False
                tile.is_fresh = False
        else:
            make_island(self.grid, tile.x, tile.y, self.gen.climate, self.palette, self.rng, ATOLL_HILL_CHANCE)
        return True

    def place_starts(self) -> "GameLevel":
        """Map every regional start to a flat game tile inside its footprint."""
        for continent in self.gen.continents.values():
            for kind in START_KINDS:
                starts = continent.starts(kind)
                for reg_start in starts.reg:
                    candidates = [
                        t for t in self.gen.game_tiles_in_reg(reg_start.x, reg_start.y) if t.can_be_start()
                    ]
                    if not candidates:
                        logger.warning("No game tile for start", kind=kind, x=reg_start.x, y=reg_start.y)
                        continue
                    start = self.rng.pick(candidates)
                    start.is_start = kind
                    start.elevation = self.palette.flat
                    starts.game.append(start)
        return self

    def spread_salt(self) -> "GameLevel":
        """Salt every body of water reachable from the map edge or from ocean/sea."""
        seen: Set[str] = set()
        w, h = self.gen.game_size
        for tile in self.grid:
            on_edge = tile.x in (0, w - 1) or tile.y in (0, h - 1)
            if on_edge and tile.is_water and not tile.is_salt:
                spread_salt(self.grid, tile, seen)

        for tile in self.grid:
            if tile.terrain in (self.palette.ocean, self.palette.sea) and not tile.is_salt:
                spread_salt(self.grid, tile, seen)
        return self

    def set_salt_fresh_effects(self) -> "GameLevel":
        """Salt water by land becomes coast; unsalted water becomes lake and freshens its shore."""
        for tile in self.grid:
            is_oasis = tile.feature is not None and tile.feature.id == "oasis"
            if not tile.is_water and not is_oasis:
                continue

            neighbors = self.grid.neighbors(tile.x, tile.y, CHEBYSHEV, 1)
            if tile.is_water:
                tile.elevation = self.palette.flat

            if tile.is_salt:
                # Salt wins over fresh
                tile.is_fresh = False
                if tile.terrain == self.palette.lake:
                    tile.terrain = self.palette.sea
                if any(n.is_land for n in neighbors):
                    tile.terrain = self.palette.coast
                continue

            if tile.is_water:
                tile.terrain = self.palette.lake
            tile.is_fresh = True
            for n in neighbors:
                n.is_fresh = True
        return self

    def set_sea_between_coast_and_ocean(self) -> "GameLevel":
        for tile in self.grid:
            if tile.terrain != self.palette.ocean:
                continue
            neighbors = self.grid.neighbors(tile.x, tile.y, CHEBYSHEV, 1)
            if any(n.terrain == self.palette.coast for n in neighbors):
                tile.terrain = self.palette.sea
        return self

    def add_rivers(self) -> "GameLevel":
        """Carve rivers from inland land tiles, a few per continent."""
        candidates_per_continent: Dict[str, List[GenTile]] = {}
        for tile in self.grid:
            if not tile.is_land or self.palette.is_mountain(tile.elevation):
                continue
            nearby = self.grid.neighbors(tile.x, tile.y, CHEBYSHEV, RIVER_SALT_DISTANCE)
            if any(n.is_salt for n in nearby):
                continue
            candidates_per_continent.setdefault(tile.area.key, []).append(tile)

        max_rivers = math.ceil(self.gen.game_size.y / TILES_PER_RIVER_ROW)
        for continent in self.gen.continents.values():
            candidates = self.rng.shuffle(candidates_per_continent.get(continent.key, []))
            count = 0
            while count < max_rivers and candidates:
                candidate = candidates.pop()
                if candidate.river_key is not None:
                    continue
                nearby = self.grid.neighbors(candidate.x, candidate.y, CHEBYSHEV, RIVER_SPACING)
                if any(n.river_key is not None for n in nearby):
                    continue
                make_river(candidate, self.grid, self.palette, self.rng, self.gen.rivers)
                count += 1

            logger.debug("Rivers carved", continent=continent.key, count=count)
        return self

    def fix_invalid_features(self) -> "GameLevel":
        """Drop features the tile's elevation, terrain or domain cannot carry."""
        for tile in self.grid:
            feature = tile.feature
            if feature is None:
                continue

            if self.palette.is_mountain(tile.elevation):
                tile.feature = None
            elif tile.elevation == self.palette.hill:
                if feature.id in FLAT_ONLY_FEATURES:
                    tile.feature = None
            elif tile.terrain == self.palette.ocean:
                if feature.id not in OCEAN_FEATURES:
                    tile.feature = None
            elif tile.is_water:
                if feature.id not in WATER_FEATURES:
                    tile.feature = None
            elif feature.id in WATER_FEATURES:
                tile.feature = None
        return self
