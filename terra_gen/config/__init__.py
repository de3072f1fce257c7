"""
Configuration modules for world generation.
"""

from .config import Settings, get_settings
from .presets import CLIMATE_BANDS, CLIMATE_TERRAIN, lookup_preset
from .static_types import STATIC_TYPES

__all__ = ['Settings', 'get_settings', 'CLIMATE_BANDS', 'CLIMATE_TERRAIN', 'lookup_preset', 'STATIC_TYPES']
