"""
World generator orchestrating the three resolution levels.

A world is generated coarse to fine:
- Strategic level: one tile per 9x9 game tiles (continents, oceans, lakes)
- Regional level: one tile per 3x3 game tiles (features, mountains, starts)
- Game level: playable tiles (coasts, rivers, final starts)

Each level is filled from the one above it, so the levels must be generated
in order. ``generate()`` runs all three.
"""

import uuid
from typing import Dict, List, Mapping, Optional, Union

import structlog
from pydantic import BaseModel, Field, model_validator

from .alea_prng import AleaPRNG
from .climate import Climate, ClimateOptions, dist_to_pole
from .game_level import GameLevel
from .grid import CHEBYSHEV, Coords, Grid
from .reg_level import RegLevel
from .strat_level import StratLevel
from .tile import Continent, GenTile, River
from .types import Palette, TypeObject, TypeRegistry, default_registry

logger = structlog.get_logger()

STRAT_SCALE = 9
REG_SCALE = 3


class WorldSize(BaseModel):
    """World dimensions and population settings."""

    name: str = Field("custom", description="Display name of the size preset")
    x: int = Field(..., gt=0, description="Width in game tiles, must be 2 * y")
    y: int = Field(..., gt=0, description="Height in game tiles, must be a multiple of 9")
    continents: int = Field(10, ge=1, description="Number of continents to seed")
    majors_per_continent: int = Field(4, ge=0, description="Major starts per continent")
    minors_per_player: int = Field(0, ge=0, description="Minor starts per major start")
    sea_level: int = Field(2, ge=1, le=3, description="1 favours land, 3 favours water")

    @model_validator(mode="after")
    def check_dimensions(self) -> "WorldSize":
        if self.y % STRAT_SCALE != 0:
            raise ValueError(f"World size must be a multiple of 9, got [x{self.x}, y{self.y}]")
        if self.x != self.y * 2:
            raise ValueError(f"World size must be a 2:1 rectangle, got [x{self.x}, y{self.y}]")
        return self


class TerraGenerator:
    """
    Procedural world generator.

    Owns the per-level grids and the continents/rivers registries; every phase
    draws from the single seeded ``rng`` so a seed regenerates the same world.
    """

    def __init__(
        self,
        size: Union[WorldSize, Mapping],
        seed: Optional[str] = None,
        flip_x: bool = False,
        flip_y: bool = False,
        flip_climate: bool = False,
        types: Optional[TypeRegistry] = None,
    ):
        """
        Initialize the generator.

        Args:
            size: World size, validated on construction
            seed: PRNG seed; a random one is generated (and kept) if omitted
            flip_x: Mirror the preset layout horizontally
            flip_y: Mirror the preset layout vertically
            flip_climate: Mirror the climate band table
            types: Type registry, defaults to the bundled static types
        """
        self.size = size if isinstance(size, WorldSize) else WorldSize.model_validate(dict(size))
        self.strat_size = Coords(self.size.x // STRAT_SCALE, self.size.y // STRAT_SCALE)
        self.reg_size = Coords(self.size.x // REG_SCALE, self.size.y // REG_SCALE)
        self.game_size = Coords(self.size.x, self.size.y)

        self.seed = seed if seed is not None else str(uuid.uuid4())[:8]
        self.rng = AleaPRNG(self.seed)

        self.flip_x = flip_x
        self.flip_y = flip_y

        self.types = types or default_registry()
        self.palette = Palette.from_registry(self.types)
        self.climate = Climate(self.types, ClimateOptions(flip=flip_climate))

        self.strat_tiles = Grid("strat", self.strat_size)
        self.reg_tiles = Grid("reg", self.reg_size)
        self.game_tiles = Grid("game", self.game_size)

        self.continents: Dict[str, Continent] = {}
        self.rivers: Dict[str, River] = {}

        logger.info(
            "Terra generator initialized",
            size=self.size.name,
            game=tuple(self.game_size),
            reg=tuple(self.reg_size),
            strat=tuple(self.strat_size),
            seed=self.seed,
        )

    def generate_strat_level(self) -> "TerraGenerator":
        StratLevel(self).generate_presets().generate_fallback_continents().generate_empties().post_process()
        logger.info(
            "Strategic level generated",
            tiles=len(self.strat_tiles),
            continents=len(self.continents),
        )
        return self

    def generate_reg_level(self) -> "TerraGenerator":
        RegLevel(self).fill_from_strat().post_process()
        logger.info("Regional level generated", tiles=len(self.reg_tiles))
        return self

    def generate_game_level(self) -> "TerraGenerator":
        GameLevel(self).fill_from_reg().post_process()
        logger.info(
            "Game level generated",
            tiles=len(self.game_tiles),
            rivers=len(self.rivers),
        )
        return self

    def generate(self) -> "TerraGenerator":
        """Generate all three levels in order."""
        return self.generate_strat_level().generate_reg_level().generate_game_level()

    # Type helpers

    def climate_for_strat_y(self, y: int) -> TypeObject:
        return self.climate.climate_for_row(y, self.strat_size.y, self.rng)

    def land_terrain(self, climate: TypeObject) -> TypeObject:
        return self.climate.land_terrain(climate)

    def feature_for_tile(self, tile: GenTile, rows: int) -> Optional[TypeObject]:
        """Roll a feature for ``tile`` on a level with ``rows`` rows."""
        return self.climate.feature_for_tile(tile, dist_to_pole(tile.y, rows), self.rng)

    # Parent lookups; a missing parent means a level was generated out of order

    def strat_from_reg_coords(self, x: int, y: int) -> GenTile:
        x %= self.reg_size.x
        return self.strat_tiles.require(x // REG_SCALE, y // REG_SCALE)

    def reg_from_game_coords(self, x: int, y: int) -> GenTile:
        x %= self.game_size.x
        return self.reg_tiles.require(x // REG_SCALE, y // REG_SCALE)

    def strat_from_game_coords(self, x: int, y: int) -> GenTile:
        x %= self.game_size.x
        return self.strat_tiles.require(x // STRAT_SCALE, y // STRAT_SCALE)

    # Footprints of a parent tile at a finer level

    def reg_tiles_in_strat(self, x: int, y: int) -> List[GenTile]:
        """The 3x3 regional tiles inside strategic tile (x, y), center first."""
        return self._footprint(self.reg_tiles, x * REG_SCALE + 1, y * REG_SCALE + 1, 1)

    def game_tiles_in_reg(self, x: int, y: int) -> List[GenTile]:
        """The 3x3 game tiles inside regional tile (x, y), center first."""
        return self._footprint(self.game_tiles, x * REG_SCALE + 1, y * REG_SCALE + 1, 1)

    def game_tiles_in_strat(self, x: int, y: int) -> List[GenTile]:
        """The 9x9 game tiles inside strategic tile (x, y), center first."""
        return self._footprint(self.game_tiles, x * STRAT_SCALE + 4, y * STRAT_SCALE + 4, 4)

    @staticmethod
    def _footprint(grid: Grid, cx: int, cy: int, radius: int) -> List[GenTile]:
        center = grid.get(cx, cy)
        neighbors = grid.neighbors(cx, cy, CHEBYSHEV, radius)
        return [center] + neighbors if center is not None else neighbors
