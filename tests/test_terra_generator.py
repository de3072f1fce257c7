"""End-to-end tests for the world generator."""

import numpy as np
import pytest
from pydantic import ValidationError

from terra_gen.cli import render_grid
from terra_gen.core.game_level import GameLevel
from terra_gen.core.grid import TileMissingError
from terra_gen.core.terra_generator import TerraGenerator, WorldSize
from terra_gen.core.tile import MAJOR


def tiny_world(seed="tiny", **overrides):
    settings = dict(name="tiny", x=18, y=9, continents=1, majors_per_continent=1, sea_level=3)
    settings.update(overrides)
    return TerraGenerator(WorldSize(**settings), seed=seed).generate()


class TestWorldSize:
    def test_valid(self):
        size = WorldSize(x=18, y=9)
        assert size.continents == 10
        assert size.sea_level == 2

    @pytest.mark.parametrize("x,y", [(20, 10), (20, 9), (36, 9), (9, 18)])
    def test_invalid_dimensions(self, x, y):
        with pytest.raises(ValidationError):
            WorldSize(x=x, y=y)

    def test_invalid_sea_level(self):
        with pytest.raises(ValidationError):
            WorldSize(x=18, y=9, sea_level=4)

    def test_generator_validates_mappings(self):
        with pytest.raises(ValueError):
            TerraGenerator({"x": 20, "y": 10})

        gen = TerraGenerator({"x": 36, "y": 18})
        assert tuple(gen.strat_size) == (4, 2)
        assert tuple(gen.reg_size) == (12, 6)
        assert tuple(gen.game_size) == (36, 18)


class TestGenerationOrder:
    def test_reg_level_needs_strat_level(self):
        gen = TerraGenerator(WorldSize(x=18, y=9), seed="order")
        with pytest.raises(TileMissingError):
            gen.generate_reg_level()

    def test_game_level_needs_reg_level(self):
        gen = TerraGenerator(WorldSize(x=18, y=9), seed="order").generate_strat_level()
        with pytest.raises(TileMissingError):
            gen.generate_game_level()


class TestTinyWorld:
    @pytest.mark.parametrize("seed", ["alpha", "beta", "gamma", "delta"])
    def test_single_continent(self, seed):
        gen = tiny_world(seed)

        assert len(gen.continents) == 1
        continent = next(iter(gen.continents.values()))
        assert continent.center is not None
        assert continent.center.is_continent_center
        assert len(continent.major_starts.strat) == 1
        start = continent.major_starts.strat[0]
        assert start.is_land
        assert start.is_start == MAJOR

    @pytest.mark.parametrize("seed", ["alpha", "beta"])
    def test_levels_complete(self, seed):
        gen = tiny_world(seed)

        for grid in (gen.strat_tiles, gen.reg_tiles, gen.game_tiles):
            assert grid.is_complete()
            assert grid.empty_coords() == []
            for tile in grid:
                assert tile.domain is not None
                assert tile.terrain is not None
                assert tile.climate is not None
                assert tile.elevation is not None

    def test_tile_coordinates_match_slots(self):
        gen = tiny_world()
        for grid in (gen.strat_tiles, gen.reg_tiles, gen.game_tiles):
            for y in range(grid.height):
                for x in range(grid.width):
                    tile = grid.require(x, y)
                    assert (tile.x, tile.y) == (x, y)


class TestDeterminism:
    def test_same_seed_same_world(self):
        a = tiny_world("repeat")
        b = tiny_world("repeat")

        assert render_grid(a.game_tiles, show_rivers=True) == render_grid(b.game_tiles, show_rivers=True)
        assert sorted(a.rivers) == sorted(b.rivers)
        assert a.rng.call_count == b.rng.call_count

    def test_random_seed_is_kept(self):
        gen = TerraGenerator(WorldSize(x=18, y=9))
        assert isinstance(gen.seed, str)
        assert len(gen.seed) == 8

        again = TerraGenerator(WorldSize(x=18, y=9), seed=gen.seed)
        assert [gen.rng.random() for _ in range(5)] == [again.rng.random() for _ in range(5)]


class TestStandardWorld:
    @pytest.fixture(scope="class")
    def gen(self):
        size = WorldSize(name="small", x=72, y=36, continents=4, majors_per_continent=2, minors_per_player=1)
        return TerraGenerator(size, seed="standard").generate()

    def test_continents_and_starts(self, gen):
        assert len(gen.continents) == 4
        for continent in gen.continents.values():
            majors = continent.major_starts
            assert 1 <= len(majors.strat) <= 2
            assert len(majors.game) <= len(majors.reg) <= len(majors.strat)
            for tile in majors.strat + majors.reg + majors.game:
                assert tile.is_land
                assert tile.is_start == MAJOR
            for tile in majors.game:
                assert tile.elevation == gen.palette.flat

    def test_minor_starts(self, gen):
        for continent in gen.continents.values():
            minors = continent.minor_starts
            assert len(minors.strat) <= gen.size.minors_per_player * len(continent.major_starts.strat)
            assert all(t.is_land and t.is_start == "minor" for t in minors.strat + minors.game)

    def test_water_is_flat(self, gen):
        for tile in gen.game_tiles:
            if tile.is_water:
                assert tile.elevation == gen.palette.flat

    def test_salt_and_fresh_water(self, gen):
        for tile in gen.game_tiles:
            if tile.is_water and tile.is_salt:
                assert tile.terrain.id in ("ocean", "sea", "coast")
            elif tile.is_water:
                assert tile.terrain.id == "lake"

    def test_rivers_are_owned_and_fresh(self, gen):
        seen = set()
        for key, river in gen.rivers.items():
            assert river.key == key
            for tile in river.tiles:
                assert tile.river_key == key
                assert tile.is_fresh
                assert not tile.is_salt
                assert tile.key not in seen
                seen.add(tile.key)

    def test_major_river_land(self, gen):
        for tile in gen.game_tiles:
            if tile.is_land and tile.is_major_river:
                assert tile.terrain == gen.palette.major_river
                assert tile.feature is None

    def test_no_features_on_mountains(self, gen):
        for tile in gen.game_tiles:
            if gen.palette.is_mountain(tile.elevation):
                assert tile.feature is None

    def test_land_share(self, gen):
        land = np.array([tile.is_land for tile in gen.game_tiles])
        assert 0 < land.mean() < 1


class TestFixInvalidFeatures:
    def test_cleanup_rules(self, types):
        gen = tiny_world("features")
        palette = gen.palette
        a, b, c, d = (gen.game_tiles.require(x, 4) for x in range(4))

        a.domain, a.elevation, a.feature = palette.land, palette.mountain, types.get("featureType:forest")
        b.domain, b.elevation, b.feature = palette.land, palette.hill, types.get("featureType:swamp")
        c.domain, c.elevation, c.terrain = palette.water, palette.flat, palette.ocean
        c.feature = types.get("featureType:kelp")
        d.domain, d.elevation, d.terrain = palette.land, palette.flat, types.get("terrainType:grass")
        d.feature = types.get("featureType:lagoon")

        GameLevel(gen).fix_invalid_features()

        assert a.feature is None
        assert b.feature is None
        assert c.feature is None
        assert d.feature is None

    def test_valid_features_kept(self, types):
        gen = tiny_world("features")
        palette = gen.palette
        tile = gen.game_tiles.require(0, 4)
        tile.domain, tile.elevation = palette.land, palette.hill
        tile.terrain = types.get("terrainType:grass")
        tile.feature = types.get("featureType:forest")

        GameLevel(gen).fix_invalid_features()
        assert tile.feature.id == "forest"


class TestCoordinateMapping:
    @pytest.fixture(scope="class")
    def gen(self):
        return tiny_world("mapping")

    def test_game_footprint_of_strat(self, gen):
        strat = gen.strat_tiles.require(1, 0)
        footprint = gen.game_tiles_in_strat(1, 0)

        assert len(footprint) == 81
        assert footprint[0] is gen.game_tiles.require(13, 4)
        assert all(gen.strat_from_game_coords(t.x, t.y) is strat for t in footprint)

    def test_game_footprint_of_reg(self, gen):
        reg = gen.reg_tiles.require(2, 1)
        footprint = gen.game_tiles_in_reg(2, 1)

        assert len(footprint) == 9
        assert all(gen.reg_from_game_coords(t.x, t.y) is reg for t in footprint)

    def test_reg_footprint_of_strat(self, gen):
        strat = gen.strat_tiles.require(0, 0)
        footprint = gen.reg_tiles_in_strat(0, 0)

        assert len(footprint) == 9
        assert all(gen.strat_from_reg_coords(t.x, t.y) is strat for t in footprint)

    def test_parent_lookup_wraps_x(self, gen):
        assert gen.reg_from_game_coords(-1, 0) is gen.reg_tiles.require(5, 0)
        assert gen.strat_from_reg_coords(6, 2) is gen.strat_tiles.require(0, 0)
