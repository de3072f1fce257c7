"""
Strategic level: continents, oceans, lakes and islands on the coarsest grid.
"""

from typing import TYPE_CHECKING, List, Optional

import structlog

from ..config.presets import CONTINENT, MAJOR_OCEANS, SEA_OCEANS, lookup_preset
from .grid import CHEBYSHEV, MANHATTAN, Coords, get_neighbor_coords
from .post_processors import remove_orphan_area
from .tile import MAJOR, MINOR, Continent, GenTile
from .types import TypeObject

if TYPE_CHECKING:
    from .terra_generator import TerraGenerator

logger = structlog.get_logger()

HILL_CHANCE = 0.05
LAKE_CHANCE = 0.5
ISLAND_CHANCE = 0.5

# Probability that infill samples land neighbors only, per sea level tier
LAND_BIAS = {1: 0.5, 2: 0.25, 3: 0.0}

# Preferred start slots around a continent center, then the backups
START_OFFSETS = [(-1, -1), (1, -1), (-1, 1), (1, 1)]
BACKUP_START_OFFSETS = [(0, -1), (0, 1), (-1, 0), (1, 0), (-2, 0), (2, 0)]


class StratLevel:
    """Generation steps for the strategic level, chained in order."""

    def __init__(self, gen: "TerraGenerator"):
        self.gen = gen
        self.grid = gen.strat_tiles
        self.palette = gen.palette
        self.rng = gen.rng
        # Continent types not yet placed
        self.unused_continents = gen.types.of_class(CONTINENT)

    def generate_presets(self) -> "StratLevel":
        """Lay down preset oceans and claim preset continent cells."""
        for y in range(self.gen.strat_size.y):
            for x in range(self.gen.strat_size.x):
                preset = lookup_preset(x, y, self.gen.strat_size, self.gen.flip_x, self.gen.flip_y)
                if preset is None:
                    continue

                if preset == CONTINENT:
                    if self._continents_full():
                        continue
                    self._claim_continent(x, y)
                    continue

                # Cells already claimed by a continent block stay land
                if self.grid.has(x, y):
                    continue
                self._set_ocean(x, y, self.gen.types.get(preset))

        logger.debug("Strategic presets placed", tiles=len(self.grid), continents=len(self.gen.continents))
        return self

    def generate_fallback_continents(self) -> "StratLevel":
        """Center the continents the presets did not provide on random free cells."""
        while not self._continents_full():
            center = self._fallback_center()
            if center is None:
                logger.warning(
                    "No cell left for continent",
                    placed=len(self.gen.continents),
                    wanted=self.gen.size.continents,
                )
                break
            self._claim_continent(center.x, center.y)
        return self

    def generate_empties(self) -> "StratLevel":
        """Fill every remaining cell from a random populated neighbor."""
        empty = self.grid.empty_coords()
        land_bias = LAND_BIAS[self.gen.size.sea_level]

        while empty:
            if not any(self.grid.neighbors(c.x, c.y) for c in empty):
                stalled = self.rng.take(empty)
                logger.warning("Strategic infill stalled, seeding ocean", x=stalled.x, y=stalled.y)
                self._set_ocean(stalled.x, stalled.y, self.gen.types.get("oceanType:pacific"))
                continue

            i = int(self.rng.random() * len(empty))
            coords = empty[i]
            if self.grid.has(coords.x, coords.y):
                empty.pop(i)
                continue

            neighbors = self.grid.neighbors(coords.x, coords.y)
            if not neighbors:
                continue

            pool = neighbors
            if self.rng.random() < land_bias:
                pool = [n for n in neighbors if n.is_land]
            if not pool:
                continue

            ref = self.rng.pick(pool)
            if ref.is_land:
                self._copy_land(coords, ref)
            else:
                self._copy_water(coords, ref, neighbors)
            empty.pop(i)

        return self

    def post_process(self) -> "StratLevel":
        """Fix orphan areas, scatter hills, and convert uniform blobs to lakes/islands."""
        for tile in self.grid:
            remove_orphan_area(tile, self.grid.neighbors(tile.x, tile.y, MANHATTAN), self.rng)

        potential_lakes: List[GenTile] = []
        islands = 0
        for tile in self.grid:
            if tile.is_land:
                if self.rng.random() < HILL_CHANCE:
                    tile.elevation = self.palette.hill

                if not tile.can_be_water():
                    continue
                neighbors = self.grid.neighbors(tile.x, tile.y, MANHATTAN, 2)
                if all(n.domain == tile.domain for n in neighbors):
                    potential_lakes.append(tile)
            else:
                if not tile.can_be_land():
                    continue
                neighbors = self.grid.neighbors(tile.x, tile.y, CHEBYSHEV, 2)
                if all(n.domain == tile.domain for n in neighbors) and self.rng.random() < ISLAND_CHANCE:
                    tile.domain = self.palette.land
                    tile.terrain = self.gen.land_terrain(tile.climate)
                    tile.is_salt = False
                    tile.is_fresh = False
                    islands += 1

        # Lakes are converted after the scan so one lake does not disqualify the next
        lakes = 0
        for tile in potential_lakes:
            if self.rng.random() < LAKE_CHANCE:
                tile.domain = self.palette.water
                tile.terrain = self.palette.lake
                tile.is_fresh = True
                tile.is_salt = False
                lakes += 1

        logger.debug("Strategic post-processing done", lakes=lakes, islands=islands)
        return self

    def _continents_full(self) -> bool:
        if not self.unused_continents:
            return True
        return len(self.gen.continents) >= self.gen.size.continents

    def _fallback_center(self) -> Optional[Coords]:
        rows = self.gen.strat_size.y
        free = [c for c in self._unclaimed() if 0 < c.y < rows - 1]
        if not free:
            free = self._unclaimed()
        if not free:
            return None
        return self.rng.pick(free)

    def _unclaimed(self) -> List[Coords]:
        """Cells not holding land; preset water may be claimed."""
        out = []
        for y in range(self.gen.strat_size.y):
            for x in range(self.gen.strat_size.x):
                tile = self.grid.get(x, y)
                if tile is None or not tile.is_land:
                    out.append(Coords(x, y))
        return out

    def _claim_continent(self, x: int, y: int) -> Continent:
        """Turn the 3x3 block around (x, y) into a new continent and pick its starts."""
        continent_type = self.rng.take(self.unused_continents)
        continent = Continent(continent_type)
        self.gen.continents[continent_type.key] = continent

        block = [Coords(x, y)] + get_neighbor_coords(x, y, CHEBYSHEV, 1, self.gen.strat_size)
        for coords in block:
            existing = self.grid.get(coords.x, coords.y)
            if existing is not None and not existing.can_change_domain():
                continue
            climate = self.gen.climate_for_strat_y(y)
            tile = GenTile(
                x=coords.x,
                y=coords.y,
                domain=self.palette.land,
                area=continent_type,
                climate=climate,
                terrain=self.gen.land_terrain(climate),
                elevation=self.palette.flat,
            )
            if coords.x == x and coords.y == y:
                tile.is_continent_center = True
                continent.center = tile
            self.grid.set(tile)

        self._add_starts(continent, x, y)
        logger.debug("Continent claimed", continent=continent.key, x=x, y=y)
        return continent

    def _add_starts(self, continent: Continent, x: int, y: int) -> None:
        wanted = self.gen.size.majors_per_continent
        preferred = list(START_OFFSETS)
        backups = list(BACKUP_START_OFFSETS)
        majors = continent.major_starts.strat

        while len(majors) < wanted and (preferred or backups):
            dx, dy = self.rng.take(preferred if preferred else backups)
            tile = self.grid.get(x + dx, y + dy)
            if tile is None or not tile.can_be_start() or tile.area != continent.type:
                continue
            tile.is_start = MAJOR
            majors.append(tile)

        if len(majors) < wanted:
            logger.warning("Not enough major start slots", continent=continent.key, placed=len(majors), wanted=wanted)

        minors_wanted = self.gen.size.minors_per_player * len(majors)
        if not minors_wanted:
            return
        pool = [
            t
            for t in self.grid.neighbors(x, y, CHEBYSHEV, 1)
            if t.area == continent.type and t.can_be_start()
        ]
        minors = continent.minor_starts.strat
        while len(minors) < minors_wanted and pool:
            tile = self.rng.take(pool)
            tile.is_start = MINOR
            minors.append(tile)

        if len(minors) < minors_wanted:
            logger.warning("Not enough minor start slots", continent=continent.key, placed=len(minors), wanted=minors_wanted)

    def _set_ocean(self, x: int, y: int, ocean: TypeObject) -> GenTile:
        terrain = self.palette.sea if ocean.key in SEA_OCEANS else self.palette.ocean
        tile = GenTile(
            x=x,
            y=y,
            domain=self.palette.water,
            area=ocean,
            climate=self.gen.climate_for_strat_y(y),
            terrain=terrain,
            elevation=self.palette.flat,
            is_salt=True,
        )
        return self.grid.set(tile)

    def _copy_land(self, coords: Coords, ref: GenTile) -> GenTile:
        # Climate follows the new cell's row, not the neighbor's
        climate = self.gen.climate_for_strat_y(coords.y)
        tile = GenTile(
            x=coords.x,
            y=coords.y,
            domain=ref.domain,
            area=ref.area,
            climate=climate,
            terrain=self.gen.land_terrain(climate),
            elevation=ref.elevation,
        )
        return self.grid.set(tile)

    def _copy_water(self, coords: Coords, ref: GenTile, neighbors: List[GenTile]) -> GenTile:
        preferred = (
            next((n for n in neighbors if n.terrain == self.palette.sea), None)
            or next((n for n in neighbors if n.area.key in MAJOR_OCEANS), None)
            or ref
        )
        tile = GenTile(
            x=coords.x,
            y=coords.y,
            domain=preferred.domain,
            area=preferred.area,
            climate=self.gen.climate_for_strat_y(coords.y),
            terrain=preferred.terrain,
            elevation=preferred.elevation,
            is_salt=preferred.terrain != self.palette.lake,
        )
        return self.grid.set(tile)
