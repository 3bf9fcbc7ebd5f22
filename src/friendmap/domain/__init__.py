"""Domain layer: entities and value objects. No dependencies on outer layers."""

from friendmap.domain.entities import (
    SENTINEL,
    Bounds,
    Contact,
    ContactSource,
    ContactStatus,
    Coordinate,
    Viewport,
    is_displayable,
)

__all__ = [
    "SENTINEL",
    "Bounds",
    "Contact",
    "ContactSource",
    "ContactStatus",
    "Coordinate",
    "Viewport",
    "is_displayable",
]
