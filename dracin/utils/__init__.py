"""
Utilitaires et constantes pour Dracin Stream.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from dracin.utils.constants import (
    DEFAULT_QUALITY,
    RATING_MAX,
    UNKNOWN_BOOK_NAME,
    USER_AGENT,
)

__all__ = [
    "DEFAULT_QUALITY",
    "RATING_MAX",
    "UNKNOWN_BOOK_NAME",
    "USER_AGENT",
]
