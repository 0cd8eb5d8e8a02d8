"""
Normalisation des catégories amont.

Une catégorie sans identifiant entier exploitable est écartée : elle ne
pourrait pas être rappelée via categoryId.
"""

from collections.abc import Mapping
from typing import Any, Optional

from dracin.core.entities.drama import Category
from dracin.services.normalization.fields import as_optional_text, as_text
from dracin.utils.helpers import first_defined, parse_count


def normalize_category(data: Any) -> Optional[Category]:
    """Convertit une catégorie amont, ou None si son id est inexploitable."""
    if not isinstance(data, Mapping):
        return None

    category_id = parse_count(first_defined(data, ("id", "categoryId")))
    if category_id is None:
        return None

    replace_name = as_optional_text(data.get("replaceName"))
    name = as_text(first_defined(data, ("name", "categoryName"), skip_blank=True))
    return Category(id=category_id, name=name or replace_name or "", replace_name=replace_name)


def normalize_categories(items: Any) -> list[Category]:
    """Normalise une liste de catégories en écartant les entrées inutilisables."""
    if not isinstance(items, (list, tuple)):
        return []
    return [c for c in (normalize_category(item) for item in items) if c is not None]
