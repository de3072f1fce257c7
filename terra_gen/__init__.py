"""
Procedural multi-resolution world generation for hex-grid strategy games.
"""

from .core import TerraGenerator, WorldSize

__version__ = "0.1.0"

__all__ = ["TerraGenerator", "WorldSize", "__version__"]
