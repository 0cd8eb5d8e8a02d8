"""
Normalisation des chapitres amont vers l'entité Episode (étape liste).

Seuls les champs de liste sont produits ici ; video_url et quality_options
sont ajoutés plus tard par la résolution du flux (Episode.with_stream).

Index des épisodes : certains fournisseurs numérotent à partir de 0,
d'autres à partir de 1. L'index déclaré par l'amont est conservé tel quel,
l'index positionnel ne sert que lorsqu'il est absent. Aucune renumérotation.
"""

from collections.abc import Mapping
from typing import Any, Optional

from dracin.core.entities.drama import Episode
from dracin.services.normalization.fields import FieldRule, as_text
from dracin.utils.helpers import first_defined, fix_url, parse_count

EPISODE_ID_KEYS = ("chapterId", "chapterid", "id")
EPISODE_INDEX_KEYS = ("chapterIndex", "index")
EPISODE_NAME_KEYS = ("chapterName", "name", "title")
EPISODE_COVER = FieldRule(("cover", "coverUrl"), default="", convert=fix_url)


def default_episode_name(position: int) -> str:
    """Nom de repli d'un épisode à partir de sa position (1-based)."""
    return f"Episode {position}"


def normalize_episode(data: Any, index: int) -> Episode:
    """
    Convertit un chapitre amont en Episode partiel.

    Args:
        data: Objet chapitre amont ; toute autre valeur est traitée comme {}
        index: Position 0-based du chapitre dans la liste amont

    Returns:
        Episode sans informations de lecture
    """
    if not isinstance(data, Mapping):
        data = {}

    chapter_id = as_text(first_defined(data, EPISODE_ID_KEYS, skip_blank=True)) or f"ep-{index}"

    declared_index = parse_count(first_defined(data, EPISODE_INDEX_KEYS))
    chapter_index = declared_index if declared_index is not None else index

    chapter_name = (
        as_text(first_defined(data, EPISODE_NAME_KEYS, skip_blank=True)).strip()
        or default_episode_name(index + 1)
    )

    return Episode(
        chapter_id=chapter_id,
        chapter_index=chapter_index,
        chapter_name=chapter_name,
        cover=EPISODE_COVER.resolve(data),
    )


def synthesize_episodes(count: int, cover: str = "") -> list[Episode]:
    """
    Construit une liste de remplacement quand l'amont ne fournit aucun chapitre.

    Mode dégradé volontaire : index 1..count, noms "Episode 1".."Episode n",
    identifiants purement positionnels.
    """
    return [
        Episode(
            chapter_id=f"ep-{position}",
            chapter_index=position + 1,
            chapter_name=default_episode_name(position + 1),
            cover=cover,
        )
        for position in range(max(count, 0))
    ]


def build_episode_list(
    chapters: Any,
    chapter_count: Optional[int] = None,
    cover: str = "",
) -> list[Episode]:
    """
    Normalise une liste de chapitres, ou la synthétise depuis chapter_count.

    Args:
        chapters: Liste amont (toute autre valeur compte comme vide)
        chapter_count: Nombre d'épisodes connu par ailleurs
        cover: Vignette des épisodes synthétisés

    Returns:
        Liste d'épisodes, vide si ni liste ni compteur
    """
    if isinstance(chapters, (list, tuple)) and chapters:
        return [normalize_episode(chapter, idx) for idx, chapter in enumerate(chapters)]
    if chapter_count:
        return synthesize_episodes(chapter_count, cover=cover)
    return []
