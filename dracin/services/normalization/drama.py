"""
Normalisation des objets drama amont vers l'entité canonique Drama.

Les fournisseurs ont fait évoluer leurs schémas (bookId/bookid/id,
coverWap/cover/coverUrl, tags objets ou chaînes...). Un seul normaliseur,
piloté par la table DRAMA_FIELDS, absorbe toutes ces variantes.

La fonction est totale : aucun chemin d'erreur, uniquement des valeurs
par défaut. Une dérive de schéma amont se traduit donc par des champs
vides plutôt que par une exception.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional

from dracin.core.entities.drama import Drama, DramaStatus
from dracin.services.normalization.fields import (
    FieldRule,
    as_optional_text,
    as_text,
    resolve_fields,
)
from dracin.utils.constants import UNKNOWN_BOOK_NAME
from dracin.utils.helpers import (
    fix_url,
    parse_count,
    parse_rating,
    parse_view_count,
    parse_year,
)


def _book_name(value: Any) -> str:
    return as_text(value).strip() or UNKNOWN_BOOK_NAME


def _non_negative(value: Any) -> int:
    return parse_count(value) or 0


# La cle canonique latestEpisode passe en tete pour qu'un Drama deja
# normalise se normalise en lui-meme.
DRAMA_FIELDS: dict[str, FieldRule] = {
    "book_id": FieldRule(("bookId", "bookid", "id"), default="", convert=as_text),
    "book_name": FieldRule(
        ("bookName", "bookname", "name"),
        default=UNKNOWN_BOOK_NAME,
        convert=_book_name,
        skip_blank=True,
    ),
    "cover": FieldRule(("coverWap", "cover", "coverUrl"), default="", convert=fix_url),
    "introduction": FieldRule(("introduction", "description"), default="", convert=as_text),
    "rating": FieldRule(("rating", "score"), convert=parse_rating),
    "year": FieldRule(("year", "releaseYear"), default=0, convert=parse_year),
    "latest_episode": FieldRule(
        ("latestEpisode", "latestChapter", "chapterCount", "totalChapter"),
        default=0,
        convert=_non_negative,
    ),
    "chapter_count": FieldRule(("chapterCount", "totalChapter"), convert=parse_count),
    "view_count": FieldRule(("viewCount", "playCount"), convert=parse_view_count),
    "corner_label": FieldRule(("cornerLabel", "cornerName"), convert=as_optional_text),
}


def _tag_name(tag: Any) -> str:
    """Un tag est soit une chaîne, soit un objet {tagName | tagEnName}."""
    if isinstance(tag, str):
        return tag
    if isinstance(tag, Mapping):
        return as_text(tag.get("tagName") or tag.get("tagEnName"))
    return ""


def _string_item(item: Any) -> str:
    return item if isinstance(item, str) else ""


# Sources de genres, par ordre de priorite : la premiere cle qui porte
# une liste est retenue, meme si elle ne produit aucun genre.
GENRE_SOURCES: tuple[tuple[str, Callable[[Any], str]], ...] = (
    ("tags", _tag_name),
    ("tagNameList", _string_item),
    ("genres", _string_item),
)


def extract_genres(data: Mapping[str, Any]) -> list[str]:
    """
    Extrait les genres dans l'ordre amont.

    Les entrées vides après extraction sont écartées.
    """
    for key, extract in GENRE_SOURCES:
        items = data.get(key)
        if isinstance(items, (list, tuple)):
            return [name for name in (extract(item) for item in items) if name]
    return []


def resolve_status(data: Mapping[str, Any]) -> DramaStatus:
    """
    Ongoing si finished vaut explicitement false ou si status == "Ongoing".

    Tout le reste, y compris l'absence d'information, vaut Completed.
    """
    if data.get("finished") is False or data.get("status") == DramaStatus.ONGOING.value:
        return DramaStatus.ONGOING
    return DramaStatus.COMPLETED


def normalize_drama(data: Any) -> Drama:
    """
    Convertit un objet drama amont de forme inconnue en Drama canonique.

    Args:
        data: Objet JSON amont ; toute autre valeur est traitée comme {}

    Returns:
        Drama entièrement renseigné (jamais d'exception)
    """
    if not isinstance(data, Mapping):
        data = {}

    fields = resolve_fields(data, DRAMA_FIELDS)
    return Drama(
        genres=extract_genres(data),
        status=resolve_status(data),
        **fields,
    )


def normalize_dramas(items: Any) -> list[Drama]:
    """Normalise une liste amont ; une valeur qui n'est pas une liste donne []."""
    if not isinstance(items, (list, tuple)):
        return []
    return [normalize_drama(item) for item in items if isinstance(item, Mapping)]


def apply_chapter_list(drama: Drama, chapters: Optional[list[Any]]) -> Drama:
    """
    Aligne les compteurs d'épisodes sur la liste de chapitres effective.

    Quand l'amont fournit la liste complète, sa longueur fait foi pour
    chapter_count et latest_episode.
    """
    if chapters:
        drama.chapter_count = len(chapters)
        drama.latest_episode = len(chapters)
    return drama
