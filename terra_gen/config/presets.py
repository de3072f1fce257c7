"""
Preset tables for strategic seeding and climate banding.

The x/y/yx tables describe a 28x14 strategic reference world: the top and
bottom rows are polar oceans, fixed columns carry the Pacific and Atlantic,
and explicit cells place continents and inland seas. Worlds of other sizes
sample the reference layout at scaled cell centers.
"""

from typing import Dict, List, Optional, Tuple

CONTINENT = "continentType"

REFERENCE_STRAT_SIZE = (28, 14)

CLIMATE_BANDS: List[List[str]] = [
    ["climateType:frozen"],
    ["climateType:frozen", "climateType:cold"],
    ["climateType:cold", "climateType:temperate"],
    ["climateType:temperate", "climateType:temperate", "climateType:warm"],
    ["climateType:temperate", "climateType:warm"],
    ["climateType:warm"],
    ["climateType:hot"],
    ["climateType:hot", "climateType:hot", "climateType:warm"],
    ["climateType:warm", "climateType:equatorial"],
    ["climateType:equatorial"],
    ["climateType:equatorial", "climateType:warm"],
    ["climateType:warm", "climateType:cold"],
    ["climateType:cold", "climateType:frozen"],
    ["climateType:frozen"],
]

CLIMATE_TERRAIN: Dict[str, str] = {
    "climateType:frozen": "terrainType:snow",
    "climateType:cold": "terrainType:tundra",
    "climateType:temperate": "terrainType:grass",
    "climateType:warm": "terrainType:plains",
    "climateType:hot": "terrainType:desert",
    "climateType:equatorial": "terrainType:grass",
}

# Oceans that salt-water infill prefers to spread
MAJOR_OCEANS = ("oceanType:atlantic", "oceanType:indian", "oceanType:pacific")

# Oceans laid down as Sea terrain rather than Ocean
SEA_OCEANS = ("oceanType:caribbean", "oceanType:mediterranean")

Y_TYPES: Dict[int, str] = {
    0: "oceanType:arctic",
    13: "oceanType:antarctic",
}

X_TYPES: Dict[int, str] = {
    0: "oceanType:pacific",
    11: "oceanType:atlantic",
    12: "oceanType:atlantic",
    27: "oceanType:pacific",
}

YX_TYPES: Dict[int, Dict[int, str]] = {
    1: {1: "oceanType:pacific", 26: "oceanType:pacific"},
    2: {13: "oceanType:atlantic", 15: CONTINENT},
    3: {1: "oceanType:pacific", 7: CONTINENT, 19: CONTINENT, 26: "oceanType:pacific"},
    4: {3: CONTINENT, 13: "oceanType:atlantic"},
    5: {
        1: "oceanType:pacific",
        13: "oceanType:atlantic",  # the Mediterranean attaches to the Atlantic
        14: "oceanType:mediterranean",
        15: "oceanType:mediterranean",
        16: "oceanType:mediterranean",
        17: "oceanType:mediterranean",
        18: "oceanType:mediterranean",
        19: "oceanType:mediterranean",
        24: CONTINENT,
        26: "oceanType:pacific",
    },
    6: {13: "oceanType:atlantic"},
    7: {
        1: "oceanType:pacific",
        4: "oceanType:caribbean",
        5: "oceanType:caribbean",
        6: "oceanType:caribbean",
        7: "oceanType:caribbean",
        8: "oceanType:caribbean",
        9: "oceanType:caribbean",
        10: "oceanType:atlantic",  # the Caribbean attaches to the Atlantic
        26: "oceanType:pacific",
    },
    8: {13: "oceanType:atlantic", 20: CONTINENT},
    9: {1: "oceanType:pacific", 4: CONTINENT, 16: CONTINENT, 26: "oceanType:pacific"},
    10: {
        8: CONTINENT,
        13: "oceanType:atlantic",
        18: "oceanType:indian",
        19: "oceanType:indian",
        20: "oceanType:indian",
        21: "oceanType:indian",
    },
    11: {
        1: "oceanType:pacific",
        18: "oceanType:indian",
        19: "oceanType:indian",
        20: "oceanType:indian",
        21: "oceanType:indian",
        24: CONTINENT,
        26: "oceanType:pacific",
    },
    12: {
        13: "oceanType:atlantic",
        18: "oceanType:indian",
        19: "oceanType:indian",
        20: "oceanType:indian",
        21: "oceanType:indian",
    },
}


def _to_reference(value: int, size: int, ref_size: int) -> int:
    """Reference index whose span contains the center of cell ``value``."""
    if size == ref_size:
        return value
    return min(ref_size - 1, int((value + 0.5) * ref_size / size))


def _reference_coords(
    x: int, y: int, strat_size: Tuple[int, int], flip_x: bool, flip_y: bool
) -> Tuple[int, int]:
    width, height = strat_size
    ref_w, ref_h = REFERENCE_STRAT_SIZE
    fx = width - 1 - x if flip_x else x
    fy = height - 1 - y if flip_y else y
    return _to_reference(fx, width, ref_w), _to_reference(fy, height, ref_h)


def lookup_preset(
    x: int,
    y: int,
    strat_size: Tuple[int, int],
    flip_x: bool = False,
    flip_y: bool = False,
) -> Optional[str]:
    """
    Preset type for a strategic cell.

    Row presets win over column presets, which win over explicit cells.

    Args:
        x: Strategic column
        y: Strategic row
        strat_size: Strategic level size (width, height)
        flip_x: Mirror the layout horizontally
        flip_y: Mirror the layout vertically

    Returns:
        An ocean type key, ``CONTINENT``, or None when the cell is free.
        On scaled-up worlds a continent marker is only reported on the first
        cell of its block so one reference continent yields one continent.
    """
    ref_x, ref_y = _reference_coords(x, y, strat_size, flip_x, flip_y)
    preset = Y_TYPES.get(ref_y) or X_TYPES.get(ref_x) or YX_TYPES.get(ref_y, {}).get(ref_x)
    if preset != CONTINENT:
        return preset

    # Neighbor toward the block origin, in mirrored order when flipped
    prev_x = x + 1 if flip_x else x - 1
    prev_y = y + 1 if flip_y else y - 1
    width, height = strat_size
    if 0 <= prev_x < width and _reference_coords(prev_x, y, strat_size, flip_x, flip_y) == (ref_x, ref_y):
        return None
    if 0 <= prev_y < height and _reference_coords(x, prev_y, strat_size, flip_x, flip_y) == (ref_x, ref_y):
        return None
    return preset
