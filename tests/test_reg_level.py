"""Tests for regional level generation steps on hand-built grids."""

import pytest

from terra_gen.core import reg_level
from terra_gen.core.reg_level import MOUNTAIN_RANGES_PER_CONTINENT, RegLevel
from terra_gen.core.terra_generator import TerraGenerator, WorldSize
from terra_gen.core.tile import MAJOR, MINOR, Continent


@pytest.fixture
def gen():
    return TerraGenerator(WorldSize(name="reg", x=18, y=9, continents=1, majors_per_continent=1), seed="reg")


class TestFillFromStrat:
    def test_start_parent_copied_directly(self, gen, make_grid, palette):
        gen.strat_tiles = make_grid(2, 1, water=[(1, 0)])
        gen.strat_tiles.require(0, 0).is_start = MAJOR

        RegLevel(gen).fill_from_strat()

        assert gen.reg_tiles.is_complete()
        for tile in gen.reg_tiles:
            if tile.x < 3:
                assert tile.is_land
                assert tile.area.key == "continentType:europe"
            if tile.is_water:
                assert tile.elevation == palette.flat
                assert tile.area.key == "oceanType:pacific"


class TestProcessContinents:
    @pytest.fixture
    def ranges(self, monkeypatch):
        """Record mountain range starts instead of carving them."""
        starts = []

        def fake_range(start, grid, palette, rng):
            starts.append(start)
            return []

        monkeypatch.setattr(reg_level, "mountain_range", fake_range)
        return starts

    @pytest.fixture
    def continent(self, gen, make_grid, types):
        strat = make_grid(2, 1)
        continent = Continent(types.get("continentType:europe"))
        continent.major_starts.strat.append(strat.require(0, 0))
        continent.minor_starts.strat.append(strat.require(1, 0))
        gen.continents = {continent.key: continent}
        return continent

    def test_starts_inside_parent_footprint(self, gen, make_grid, continent, ranges):
        gen.reg_tiles = make_grid(6, 3)

        RegLevel(gen).process_continents()

        majors = continent.major_starts.reg
        minors = continent.minor_starts.reg
        assert len(majors) == 1 and len(minors) == 1
        assert majors[0].is_start == MAJOR
        assert 0 <= majors[0].x < 3
        assert minors[0].is_start == MINOR
        assert 3 <= minors[0].x < 6

        # Starts are reserved before mountain ranges pick their sources
        assert len(ranges) == MOUNTAIN_RANGES_PER_CONTINENT
        assert majors[0] not in ranges
        assert minors[0] not in ranges

    def test_start_without_land_is_skipped(self, gen, make_grid, continent, ranges):
        gen.reg_tiles = make_grid(6, 3, water=[(x, y) for y in range(3) for x in range(3)])

        RegLevel(gen).process_continents()

        assert continent.major_starts.reg == []
        assert len(continent.minor_starts.reg) == 1
        assert all(t.is_land for t in ranges)


class TestRaiseFoothills:
    def test_skips_salt_water(self, gen, make_grid, palette, monkeypatch):
        monkeypatch.setattr(reg_level, "MOUNTAIN_HILL_CHANCE", 1.0)
        gen.reg_tiles = make_grid(6, 3, water=[(1, 1)], lakes=[(3, 1)])
        grid = gen.reg_tiles
        mountain = grid.require(2, 1)
        mountain.elevation = palette.mountain
        plain = grid.require(5, 1)

        RegLevel(gen)._raise_foothills([mountain, plain])

        assert grid.require(1, 1).elevation == palette.flat
        assert grid.require(3, 1).elevation == palette.hill
        assert grid.require(2, 0).elevation == palette.hill
        assert grid.require(2, 2).elevation == palette.hill
        # Only mountains raise their surroundings
        assert grid.require(4, 1).elevation == palette.flat
        assert grid.require(0, 1).elevation == palette.flat
