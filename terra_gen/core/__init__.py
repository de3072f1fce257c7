"""
Core world generation functionality.
"""

from .alea_prng import AleaPRNG
from .climate import Climate, ClimateOptions
from .grid import CHEBYSHEV, MANHATTAN, Coords, Grid, TileMissingError, get_neighbor_coords
from .snake import Acceptance, Compass, Snake
from .terra_generator import TerraGenerator, WorldSize
from .tile import Continent, GenTile, River
from .types import Palette, TypeObject, TypeRegistry, UnknownTypeError, default_registry

__all__ = ['AleaPRNG', 'Climate', 'ClimateOptions', 'CHEBYSHEV', 'MANHATTAN', 'Coords', 'Grid',
           'TileMissingError', 'get_neighbor_coords', 'Acceptance', 'Compass', 'Snake',
           'TerraGenerator', 'WorldSize', 'Continent', 'GenTile', 'River',
           'Palette', 'TypeObject', 'TypeRegistry', 'UnknownTypeError', 'default_registry']
