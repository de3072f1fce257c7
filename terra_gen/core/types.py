"""
Type taxonomy lookup.

Every domain, elevation, terrain, climate, ocean, continent and feature the
generator assigns is a ``TypeObject`` resolved through a ``TypeRegistry`` by
its ``"<class>:<id>"`` key. Missing keys fail loudly.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

import structlog

logger = structlog.get_logger()


class UnknownTypeError(KeyError):
    """Raised when a type key is not present in the registry."""


@dataclass(frozen=True)
class TypeObject:
    """A static type definition, e.g. ``terrainType:grass``."""

    key: str
    name: str

    @property
    def class_key(self) -> str:
        """Type class, e.g. ``terrainType``."""
        return self.key.split(":", 1)[0]

    @property
    def id(self) -> str:
        """Short id within the class, e.g. ``grass``."""
        return self.key.split(":", 1)[1]

    def __repr__(self) -> str:
        return f"TypeObject({self.key})"


class TypeRegistry:
    """Keyed store of ``TypeObject`` definitions, grouped by type class."""

    def __init__(self, types: Iterable[TypeObject]):
        self._types: Dict[str, TypeObject] = {}
        self._classes: Dict[str, List[TypeObject]] = {}
        for type_obj in types:
            if ":" not in type_obj.key:
                raise ValueError(f"Type key must be '<class>:<id>', got '{type_obj.key}'")
            self._types[type_obj.key] = type_obj
            self._classes.setdefault(type_obj.class_key, []).append(type_obj)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, str]]) -> "TypeRegistry":
        """
        Build a registry from ``{class_key: {id: name}}`` data.

        Args:
            data: Static type data, see ``terra_gen.config.static_types``

        Returns:
            TypeRegistry with one TypeObject per entry
        """
        types = [
            TypeObject(f"{class_key}:{type_id}", name)
            for class_key, entries in data.items()
            for type_id, name in entries.items()
        ]
        return cls(types)

    def get(self, key: str) -> TypeObject:
        try:
            return self._types[key]
        except KeyError:
            raise UnknownTypeError(f"Type '{key}' does not exist") from None

    def find(self, key: str) -> Optional[TypeObject]:
        return self._types.get(key)

    def of_class(self, class_key: str) -> List[TypeObject]:
        """All types of a class in definition order (a new list each call)."""
        if class_key not in self._classes:
            raise UnknownTypeError(f"Type class '{class_key}' does not exist")
        return list(self._classes[class_key])

    def __contains__(self, key: str) -> bool:
        return key in self._types

    def __len__(self) -> int:
        return len(self._types)


_default_registry: Optional[TypeRegistry] = None


def default_registry() -> TypeRegistry:
    """Registry built from the bundled static type data."""
    global _default_registry
    if _default_registry is None:
        from ..config.static_types import STATIC_TYPES

        _default_registry = TypeRegistry.from_mapping(STATIC_TYPES)
        logger.debug("Loaded static types", count=len(_default_registry))
    return _default_registry


@dataclass(frozen=True)
class Palette:
    """The fixed set of types generation steps compare against and assign."""

    land: TypeObject
    water: TypeObject
    flat: TypeObject
    hill: TypeObject
    mountain: TypeObject
    snow_mountain: TypeObject
    ocean: TypeObject
    sea: TypeObject
    coast: TypeObject
    lake: TypeObject
    major_river: TypeObject
    flood_plain: TypeObject

    @classmethod
    def from_registry(cls, types: TypeRegistry) -> "Palette":
        return cls(
            land=types.get("domainType:land"),
            water=types.get("domainType:water"),
            flat=types.get("elevationType:flat"),
            hill=types.get("elevationType:hill"),
            mountain=types.get("elevationType:mountain"),
            snow_mountain=types.get("elevationType:snowMountain"),
            ocean=types.get("terrainType:ocean"),
            sea=types.get("terrainType:sea"),
            coast=types.get("terrainType:coast"),
            lake=types.get("terrainType:lake"),
            major_river=types.get("terrainType:majorRiver"),
            flood_plain=types.get("featureType:floodPlain"),
        )

    def is_mountain(self, elevation: TypeObject) -> bool:
        return elevation == self.mountain or elevation == self.snow_mountain
