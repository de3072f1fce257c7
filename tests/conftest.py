"""Shared fixtures for world generation tests."""

from typing import Iterable, Tuple

import pytest

from terra_gen.core.alea_prng import AleaPRNG
from terra_gen.core.grid import Coords, Grid
from terra_gen.core.tile import GenTile
from terra_gen.core.types import Palette, default_registry


@pytest.fixture
def types():
    return default_registry()


@pytest.fixture
def palette(types):
    return Palette.from_registry(types)


@pytest.fixture
def rng():
    return AleaPRNG("test_seed")


@pytest.fixture
def make_grid(types, palette):
    """
    Factory for small hand-built grids.

    Every tile is temperate grassland on the Europe continent unless its
    coordinates are listed in ``water`` (Pacific ocean) or ``lakes``.
    """

    def _make(
        width: int,
        height: int,
        water: Iterable[Tuple[int, int]] = (),
        lakes: Iterable[Tuple[int, int]] = (),
    ) -> Grid:
        water = set(water)
        lakes = set(lakes)
        grid = Grid("test", Coords(width, height))
        temperate = types.get("climateType:temperate")
        for y in range(height):
            for x in range(width):
                if (x, y) in water or (x, y) in lakes:
                    tile = GenTile(
                        x=x,
                        y=y,
                        domain=palette.water,
                        area=types.get("oceanType:pacific"),
                        climate=temperate,
                        terrain=palette.lake if (x, y) in lakes else palette.ocean,
                        elevation=palette.flat,
                    )
                else:
                    tile = GenTile(
                        x=x,
                        y=y,
                        domain=palette.land,
                        area=types.get("continentType:europe"),
                        climate=temperate,
                        terrain=types.get("terrainType:grass"),
                        elevation=palette.flat,
                    )
                grid.set(tile)
        return grid

    return _make
