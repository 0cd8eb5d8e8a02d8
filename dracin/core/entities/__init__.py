"""
Canonical entities of the drama catalog.

Entities are the only stable contracts of the system. They are rebuilt
from upstream JSON on every request and never persisted.

Exports:
- Drama: A catalog entry composed of ordered episodes
- DramaStatus: Ongoing or Completed
- Episode: A single playable unit of a drama
- QualityOption: A playable stream at a given resolution
- Category: A catalog category
"""

from dracin.core.entities.drama import (
    Category,
    Drama,
    DramaStatus,
    Episode,
    QualityOption,
)

__all__ = [
    "Category",
    "Drama",
    "DramaStatus",
    "Episode",
    "QualityOption",
]
