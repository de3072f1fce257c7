"""
Climate banding and climate-driven terrain and feature selection.

This module implements:
- Row-based climate bands interpolated between adjacent band table entries
- Land terrain per climate
- Pole distance per row
- The climate x domain/terrain feature table with polar ice bias
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config.presets import CLIMATE_BANDS, CLIMATE_TERRAIN
from .alea_prng import AleaPRNG
from .tile import GenTile
from .types import TypeObject, TypeRegistry, UnknownTypeError


@dataclass
class ClimateOptions:
    """Climate banding options."""

    bands: List[List[str]] = field(default_factory=lambda: [list(b) for b in CLIMATE_BANDS])
    climate_terrain: Dict[str, str] = field(default_factory=lambda: dict(CLIMATE_TERRAIN))
    flip: bool = False  # Mirror the band table for a flipped hemisphere

    # Ice chance on the pole rows and on the rows next to them
    pole_ice_chance: float = 0.75
    near_pole_ice_chance: float = 0.25


def dist_to_pole(y: int, rows: int) -> int:
    """Rows to the nearest map edge; 0 on the top/bottom row."""
    if rows <= 0:
        return 0
    max_index = rows - 1
    yy = max(0, min(y, max_index))
    return min(yy, max_index - yy)


class Climate:
    """Resolves climates, land terrains and features against a type registry."""

    def __init__(self, types: TypeRegistry, options: Optional[ClimateOptions] = None):
        """
        Initialize climate banding.

        Args:
            types: Registry used to resolve climate/terrain/feature keys
            options: Band table and ice chances
        """
        self.types = types
        self.options = options or ClimateOptions()

        self.bands = list(reversed(self.options.bands)) if self.options.flip else list(self.options.bands)
        if not self.bands:
            raise ValueError("Climate band table is empty")

        # Fail on construction rather than mid-generation
        self._climates = {key: types.get(key) for band in self.bands for key in band}
        self._terrains = {
            climate: types.get(terrain) for climate, terrain in self.options.climate_terrain.items()
        }

        self.land = types.get("domainType:land")
        self.ocean = types.get("terrainType:ocean")
        self.coast = types.get("terrainType:coast")
        self.lake = types.get("terrainType:lake")

    def band_options(self, y: int, rows: int) -> List[str]:
        """Candidate climate keys for a row: one band, or two adjacent bands merged."""
        count = len(self.bands)

        # Use the center of the row to reduce boundary artifacts
        pos = (y + 0.5) / rows
        f_index = pos * count

        lo = max(0, math.floor(f_index))
        hi = min(count - 1, math.ceil(f_index))
        if lo == hi:
            return list(self.bands[lo])
        return self.bands[lo] + self.bands[hi]

    def climate_for_row(self, y: int, rows: int, rng: AleaPRNG) -> TypeObject:
        """Weighted-random climate for a row; duplicated band entries weigh more."""
        return self._climates[rng.pick(self.band_options(y, rows))]

    def land_terrain(self, climate: TypeObject) -> TypeObject:
        terrain = self._terrains.get(climate.key)
        if terrain is None:
            raise UnknownTypeError(f"No land terrain configured for climate '{climate.key}'")
        return terrain

    def _feature(self, key: str) -> TypeObject:
        return self.types.get(f"featureType:{key}")

    def feature_for_tile(self, tile: GenTile, pole_distance: int, rng: AleaPRNG) -> Optional[TypeObject]:
        """
        Roll a feature for a tile from its climate, domain and terrain.

        Args:
            tile: Tile with domain/climate/terrain already set
            pole_distance: Rows to the nearest pole at the tile's level
            rng: Generation PRNG (one draw per call)

        Returns:
            Feature type or None
        """
        rand = rng.random()

        if (pole_distance == 0 and rand < self.options.pole_ice_chance) or (
            pole_distance == 1 and rand < self.options.near_pole_ice_chance
        ):
            return self._feature("ice")

        climate = tile.climate.id
        is_land = tile.domain == self.land
        is_shallow = tile.terrain == self.coast or tile.terrain == self.lake

        if climate == "frozen":
            if tile.terrain == self.ocean:
                return self._feature("ice") if rand < 0.2 else None

        elif climate == "cold":
            if is_land:
                if rand < 0.25:
                    return self._feature("swamp")
                return self._feature("pineForest") if rand < 0.75 else None
            if is_shallow:
                return self._feature("kelp") if rand < 0.2 else None

        elif climate == "temperate":
            if is_land:
                return self._feature("forest") if rand < 0.5 else None

        elif climate == "warm":
            if is_land:
                if rand < 0.2:
                    return self._feature("forest")
                return self._feature("shrubs") if rand < 0.5 else None

        elif climate in ("hot", "equatorial"):
            if is_land:
                if climate == "hot":
                    if rand < 0.1:
                        return self._feature("oasis")
                    return self._feature("shrubs") if rand < 0.25 else None
                return self._feature("jungle") if rand < 0.75 else None
            if tile.terrain == self.ocean:
                return self._feature("atoll") if rand < 0.1 else None
            if is_shallow:
                return self._feature("lagoon") if rand < 0.25 else None

        return None
