"""Tests for climate banding and climate-driven selection."""

import pytest

from terra_gen.config.presets import CLIMATE_BANDS
from terra_gen.core.climate import Climate, ClimateOptions, dist_to_pole
from terra_gen.core.types import UnknownTypeError


class FixedRandom:
    """PRNG stand-in returning one value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class TestDistances:
    def test_dist_to_pole(self):
        assert [dist_to_pole(y, 6) for y in range(6)] == [0, 1, 2, 2, 1, 0]
        assert dist_to_pole(-3, 6) == 0
        assert dist_to_pole(3, 0) == 0


class TestClimateBands:
    @pytest.fixture
    def climate(self, types):
        return Climate(types)

    def test_single_row_uses_middle_band(self, climate):
        assert climate.band_options(0, 1) == CLIMATE_BANDS[7]

    def test_adjacent_bands_merge(self, climate):
        options = climate.band_options(0, 14)
        assert options == CLIMATE_BANDS[0] + CLIMATE_BANDS[1]

    def test_last_row_clamped(self, climate):
        assert climate.band_options(13, 14) == CLIMATE_BANDS[13]

    def test_flip_mirrors_rows(self, types, climate):
        flipped = Climate(types, ClimateOptions(flip=True))
        for y in range(13):
            assert sorted(flipped.band_options(y, 14)) == sorted(climate.band_options(12 - y, 14))

    def test_climate_for_row_in_band(self, climate, rng):
        for y in range(9):
            picked = climate.climate_for_row(y, 9, rng)
            assert picked.key in climate.band_options(y, 9)

    def test_poles_are_frozen(self, climate, rng):
        assert climate.climate_for_row(13, 14, rng).id == "frozen"

    def test_unknown_band_key(self, types):
        with pytest.raises(UnknownTypeError):
            Climate(types, ClimateOptions(bands=[["climateType:boiling"]]))


class TestLandTerrain:
    def test_mapping(self, types):
        climate = Climate(types)
        assert climate.land_terrain(types.get("climateType:temperate")).id == "grass"
        assert climate.land_terrain(types.get("climateType:hot")).id == "desert"
        assert climate.land_terrain(types.get("climateType:frozen")).id == "snow"

    def test_unmapped_climate(self, types):
        climate = Climate(types, ClimateOptions(climate_terrain={}))
        with pytest.raises(UnknownTypeError):
            climate.land_terrain(types.get("climateType:hot"))


class TestFeatures:
    @pytest.fixture
    def land(self, make_grid):
        return make_grid(1, 1).require(0, 0)

    def test_pole_ice(self, types, land):
        climate = Climate(types)
        assert climate.feature_for_tile(land, 0, FixedRandom(0.5)).id == "ice"
        assert climate.feature_for_tile(land, 1, FixedRandom(0.2)).id == "ice"

    def test_temperate_forest(self, types, land):
        climate = Climate(types)
        assert climate.feature_for_tile(land, 5, FixedRandom(0.3)).id == "forest"
        assert climate.feature_for_tile(land, 5, FixedRandom(0.6)) is None

    def test_equatorial_ocean_atoll(self, types, make_grid):
        tile = make_grid(1, 1, water=[(0, 0)]).require(0, 0)
        tile.climate = types.get("climateType:equatorial")
        climate = Climate(types)

        assert climate.feature_for_tile(tile, 5, FixedRandom(0.05)).id == "atoll"
        assert climate.feature_for_tile(tile, 5, FixedRandom(0.5)) is None
