"""
Couche de normalisation des réponses amont.

Fonctions pures (sans effet de bord) qui convertissent un JSON amont de
forme variable en enregistrement canonique :
- normalize_drama : objet drama -> Drama
- normalize_episode / build_episode_list : chapitres -> Episode
- extract_quality_options : réponse épisode -> QualityOption triées
- normalize_category : catégorie -> Category

Aucune de ces fonctions ne lève d'exception.
"""

from dracin.services.normalization.category import normalize_categories, normalize_category
from dracin.services.normalization.drama import (
    apply_chapter_list,
    normalize_drama,
    normalize_dramas,
)
from dracin.services.normalization.episode import (
    build_episode_list,
    normalize_episode,
    synthesize_episodes,
)
from dracin.services.normalization.stream import (
    extract_quality_options,
    sort_quality_options,
)

__all__ = [
    "apply_chapter_list",
    "build_episode_list",
    "extract_quality_options",
    "normalize_categories",
    "normalize_category",
    "normalize_drama",
    "normalize_dramas",
    "normalize_episode",
    "sort_quality_options",
    "synthesize_episodes",
]
