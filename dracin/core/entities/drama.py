"""
Entités canoniques du catalogue.

Les seuls contrats stables du système : tout ce qui vient de l'amont est
non typé et variable, tout ce qui sort du normaliseur suit ces formes.
Les enregistrements sont transitoires, reconstruits à chaque requête.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


class DramaStatus(Enum):
    """Statut de diffusion d'un drama (classification stricte à deux valeurs)."""

    ONGOING = "Ongoing"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class QualityOption:
    """
    Flux lisible pour une résolution donnée.

    Attributs :
        quality : Libellé de résolution (720, 1080...), non validé
        video_url : URL absolue du flux
        is_default : Flux proposé par défaut au lecteur
    """

    quality: int
    video_url: str
    is_default: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Sérialise avec les clés camelCase attendues par le front-end."""
        return {
            "quality": self.quality,
            "videoUrl": self.video_url,
            "isDefault": self.is_default,
        }


@dataclass
class Drama:
    """
    Entrée du catalogue (une "série").

    Attributs :
        book_id : Identifiant stable côté amont
        book_name : Titre, "Unknown" si absent
        cover : URL absolue de l'affiche (vide autorisée)
        introduction : Synopsis
        rating : Note sur l'échelle 0-10
        genres : Genres dans l'ordre amont
        status : Ongoing ou Completed
        year : Année de sortie, 0 si inconnue
        latest_episode : Dernier épisode disponible
        chapter_count : Nombre d'épisodes, None si inconnu (distinct de 0)
        view_count : Nombre de vues, None si inconnu
        corner_label : Badge promotionnel optionnel
    """

    book_id: str = ""
    book_name: str = "Unknown"
    cover: str = ""
    introduction: str = ""
    rating: float = 0.0
    genres: list[str] = field(default_factory=list)
    status: DramaStatus = DramaStatus.COMPLETED
    year: int = 0
    latest_episode: int = 0
    chapter_count: Optional[int] = None
    view_count: Optional[int] = None
    corner_label: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Sérialise en camelCase, sans les champs optionnels non renseignés."""
        data: dict[str, Any] = {
            "bookId": self.book_id,
            "bookName": self.book_name,
            "cover": self.cover,
            "introduction": self.introduction,
            "rating": self.rating,
            "genres": list(self.genres),
            "status": self.status.value,
            "year": self.year,
            "latestEpisode": self.latest_episode,
        }
        if self.chapter_count is not None:
            data["chapterCount"] = self.chapter_count
        if self.view_count is not None:
            data["viewCount"] = self.view_count
        if self.corner_label is not None:
            data["cornerLabel"] = self.corner_label
        return data


@dataclass(frozen=True)
class Episode:
    """
    Épisode (ou "chapitre") d'un drama.

    Complété en deux temps : la liste fournit les quatre premiers champs,
    la résolution du flux ajoute video_url et quality_options.

    Attributs :
        chapter_id : Identifiant unique dans le drama ("ep-<index>" si absent)
        chapter_index : Position déclarée par l'amont (ou positionnelle)
        chapter_name : Titre, "Episode <n>" par défaut
        cover : URL de la vignette
        video_url : URL du flux par défaut, None tant que non résolu
        quality_options : Flux disponibles, None tant que non résolu
    """

    chapter_id: str
    chapter_index: int
    chapter_name: str
    cover: str = ""
    video_url: Optional[str] = None
    quality_options: Optional[tuple[QualityOption, ...]] = None

    @property
    def is_resolved(self) -> bool:
        """Vrai une fois le flux résolu."""
        return self.quality_options is not None

    def with_stream(self, options: list[QualityOption]) -> "Episode":
        """
        Retourne une copie complétée par les flux résolus.

        video_url pointe vers l'option marquée par défaut (ou la première).
        """
        default = next((o for o in options if o.is_default), options[0] if options else None)
        return replace(
            self,
            video_url=default.video_url if default else None,
            quality_options=tuple(options),
        )

    def to_dict(self) -> dict[str, Any]:
        """Sérialise en camelCase ; les champs de lecture n'apparaissent qu'une fois résolus."""
        data: dict[str, Any] = {
            "chapterId": self.chapter_id,
            "chapterIndex": self.chapter_index,
            "chapterName": self.chapter_name,
            "cover": self.cover,
        }
        if self.quality_options is not None:
            data["videoUrl"] = self.video_url
            data["qualityOptions"] = [o.to_dict() for o in self.quality_options]
        return data


@dataclass(frozen=True)
class Category:
    """Catégorie du catalogue, avec un libellé d'affichage optionnel."""

    id: int
    name: str
    replace_name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.replace_name is not None:
            data["replaceName"] = self.replace_name
        return data
