"""
Regional level: each strategic tile split into 3x3 regional tiles.
"""

from typing import TYPE_CHECKING, Dict, List, Optional

import structlog

from .grid import MANHATTAN, get_neighbor_coords
from .post_processors import make_island, mountain_range, remove_orphan_area
from .tile import MAJOR, MINOR, GenTile

if TYPE_CHECKING:
    from .terra_generator import TerraGenerator

logger = structlog.get_logger()

ELEVATION_FLIP_CHANCE = 0.25
SEA_ISLAND_CHANCE = 0.5
OCEAN_ISLAND_CHANCE = 0.01
ISLAND_HILL_CHANCE = 0.75
ISLAND_AREA_RADIUS = 3
MOUNTAIN_RANGES_PER_CONTINENT = 3
MOUNTAIN_HILL_CHANCE = 0.5


class RegLevel:
    """Generation steps for the regional level, chained in order."""

    def __init__(self, gen: "TerraGenerator"):
        self.gen = gen
        self.grid = gen.reg_tiles
        self.palette = gen.palette
        self.rng = gen.rng

    def fill_from_strat(self) -> "RegLevel":
        """Create every regional tile from a random nearby strategic tile."""
        size = self.gen.reg_size
        for y in range(size.y):
            for x in range(size.x):
                parent = self.gen.strat_from_reg_coords(x, y)

                # Start parents are copied as-is so the start block stays land
                if not parent.is_start:
                    candidates = [parent] + [
                        self.gen.strat_from_reg_coords(c.x, c.y)
                        for c in get_neighbor_coords(x, y, MANHATTAN, 1, size)
                    ]
                    parent = self.rng.pick(candidates)

                if parent.is_land:
                    elevation = parent.elevation
                    if self.rng.random() < ELEVATION_FLIP_CHANCE:
                        elevation = self.palette.hill if elevation == self.palette.flat else self.palette.flat
                else:
                    elevation = self.palette.flat

                tile = GenTile(
                    x=x,
                    y=y,
                    domain=parent.domain,
                    area=parent.area,
                    climate=parent.climate,
                    terrain=parent.terrain,
                    elevation=elevation,
                    is_salt=parent.is_salt,
                    is_fresh=parent.is_fresh,
                )
                tile.feature = self.gen.feature_for_tile(tile, size.y)
                self.grid.set(tile)

        return self

    def post_process(self) -> "RegLevel":
        return self.remove_orphans().add_islands().process_continents()

    def remove_orphans(self) -> "RegLevel":
        for tile in self.grid:
            remove_orphan_area(tile, self.grid.neighbors(tile.x, tile.y, MANHATTAN), self.rng)
        return self

    def add_islands(self) -> "RegLevel":
        """Stamp small islands into uniform stretches of sea (and rarely ocean)."""
        stamped = 0
        for tile in self.grid:
            if tile.terrain == self.palette.sea:
                if self.rng.random() > SEA_ISLAND_CHANCE:
                    continue
            elif tile.terrain == self.palette.ocean:
                if self.rng.random() > OCEAN_ISLAND_CHANCE:
                    continue
            else:
                continue

            area = self.grid.neighbors(tile.x, tile.y, MANHATTAN, ISLAND_AREA_RADIUS)
            if all(n.terrain == tile.terrain for n in area):
                make_island(
                    self.grid, tile.x, tile.y, self.gen.climate, self.palette, self.rng, ISLAND_HILL_CHANCE
                )
                stamped += 1

        logger.debug("Regional islands stamped", count=stamped)
        return self

    def process_continents(self) -> "RegLevel":
        """Map starts down from the strategic level and carve mountain ranges."""
        land_per_continent: Dict[str, List[GenTile]] = {}
        for tile in self.grid:
            if tile.is_land:
                land_per_continent.setdefault(tile.area.key, []).append(tile)

        for continent in self.gen.continents.values():
            land = land_per_continent.get(continent.key, [])

            for kind in (MAJOR, MINOR):
                starts = continent.starts(kind)
                for strat_start in starts.strat:
                    start = self._map_start(strat_start, kind)
                    if start is None:
                        continue
                    starts.reg.append(start)
                    # Reserved: keep mountains off it
                    if start in land:
                        land.remove(start)

            for _ in range(MOUNTAIN_RANGES_PER_CONTINENT):
                if not land:
                    logger.debug("No land left for mountain range", continent=continent.key)
                    break
                range_start = self.rng.take(land)
                walked = mountain_range(range_start, self.grid, self.palette, self.rng)
                self._raise_foothills(walked)

        return self

    def _map_start(self, strat_start: GenTile, kind: str) -> Optional[GenTile]:
        candidates = [t for t in self.gen.reg_tiles_in_strat(strat_start.x, strat_start.y) if t.can_be_start()]
        if not candidates:
            logger.warning("No regional tile for start", kind=kind, x=strat_start.x, y=strat_start.y)
            return None
        start = self.rng.pick(candidates)
        start.is_start = kind
        return start

    def _raise_foothills(self, mountains: List[GenTile]) -> None:
        """Flat neighbors of carved mountains may become hills; sea and ocean are skipped."""
        for tile in mountains:
            if not self.palette.is_mountain(tile.elevation):
                continue
            for neighbor in self.grid.neighbors(tile.x, tile.y, MANHATTAN):
                if neighbor.is_water and neighbor.terrain != self.palette.lake:
                    continue
                if neighbor.elevation == self.palette.flat and self.rng.random() < MOUNTAIN_HILL_CHANCE:
                    neighbor.elevation = self.palette.hill
