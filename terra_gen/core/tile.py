"""
Data model for generated tiles, continents and rivers.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .types import TypeObject

MAJOR = "major"
MINOR = "minor"
START_KINDS = (MAJOR, MINOR)


def tile_key(x: int, y: int) -> str:
    """Coordinate-derived key used for tiles within a level."""
    return f"x{x},y{y}"


@dataclass(eq=False)
class GenTile:
    """
    A tile at one resolution level, carrying everything generation assigns.

    Core Attributes:
      x, y: Coordinates within the tile's level.
      domain: Land or water (domainType).
      area: Continent for land, ocean/sea for water.
      climate, terrain, elevation: Type objects of their class.
      feature: Optional featureType.
      is_salt / is_fresh: Ocean/sea vs. lake/river water influence.
      river_key: Key of the river carved through this tile, if any.
      is_major_river: Tile lies downstream of a confluence.
      is_continent_center: Strategic center of a continent.
      is_start: None, "major" or "minor".
    """

    x: int
    y: int
    domain: TypeObject
    area: TypeObject
    climate: TypeObject
    terrain: TypeObject
    elevation: TypeObject
    feature: Optional[TypeObject] = None
    is_salt: bool = False
    is_fresh: bool = False
    river_key: Optional[str] = None
    is_major_river: bool = False
    is_continent_center: bool = False
    is_start: Optional[str] = None

    def __post_init__(self):
        if self.is_start is not None and self.is_start not in START_KINDS:
            raise ValueError(f"is_start must be one of {START_KINDS} or None, not {self.is_start!r}")

    @property
    def key(self) -> str:
        return tile_key(self.x, self.y)

    @property
    def is_land(self) -> bool:
        return self.domain.id == "land"

    @property
    def is_water(self) -> bool:
        return self.domain.id == "water"

    def can_change_domain(self) -> bool:
        """Starts and continent centers keep their domain for good."""
        return not self.is_start and not self.is_continent_center

    def can_be_land(self) -> bool:
        return self.is_water and self.can_change_domain()

    def can_be_water(self) -> bool:
        return self.is_land and self.can_change_domain()

    def can_be_start(self) -> bool:
        return self.is_land and not self.is_start

    def __repr__(self) -> str:
        base = f"GenTile(x={self.x}, y={self.y}, {self.domain.id}, {self.terrain.id}, {self.elevation.id}"
        if self.feature:
            base += f", feature={self.feature.id}"
        if self.is_start:
            base += f", start={self.is_start}"
        if self.river_key:
            base += f", river={self.river_key}"
        return base + ")"


@dataclass
class StartLists:
    """Start tiles of one kind, kept in parallel for all three levels."""

    strat: List[GenTile] = field(default_factory=list)
    reg: List[GenTile] = field(default_factory=list)
    game: List[GenTile] = field(default_factory=list)


@dataclass
class Continent:
    """A continent created during strategic seeding."""

    type: TypeObject
    center: Optional[GenTile] = None
    major_starts: StartLists = field(default_factory=StartLists)
    minor_starts: StartLists = field(default_factory=StartLists)

    @property
    def key(self) -> str:
        return self.type.key

    def starts(self, kind: str) -> StartLists:
        return self.major_starts if kind == MAJOR else self.minor_starts


@dataclass
class River:
    """A river and the tiles it has carved, in walk order."""

    key: str
    tiles: List[GenTile] = field(default_factory=list)

    @property
    def tile_keys(self) -> List[str]:
        return [t.key for t in self.tiles]

    def index_of(self, tile: GenTile) -> int:
        """Position of tile in the river, or -1."""
        for i, t in enumerate(self.tiles):
            if t is tile:
                return i
        return -1

    def __len__(self) -> int:
        return len(self.tiles)
