"""
Extraction des flux lisibles (QualityOption) depuis une réponse épisode.

Deux chemins :
- Liste de CDN (cdnList) : chaque entrée porte un domaine et une liste de
  chemins qualifiés par une résolution. Le premier CDN qui produit au moins
  un flux est retenu, les suivants ne sont pas examinés.
- Repli : une URL unique au premier niveau (videoUrl / url / videoPath / path).

Le tri final place toujours 720 en tête (résolution par défaut la plus
compatible), puis les autres résolutions par ordre décroissant.
"""

from collections.abc import Mapping
from typing import Any, Optional

from dracin.core.entities.drama import QualityOption
from dracin.utils.constants import DEFAULT_QUALITY
from dracin.utils.helpers import first_defined, fix_url, parse_count

CDN_LIST_KEYS = ("cdnList",)
CDN_DOMAIN_KEYS = ("cdnDomain", "domain")
CDN_PATHS_KEYS = ("videoPathList", "pathList")
PATH_QUALITY_KEYS = ("definition", "quality")
PATH_URL_KEYS = ("videoPath", "path", "url")
DIRECT_URL_KEYS = ("videoUrl", "url", "videoPath", "path")


def _sequence(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _quality(entry: Mapping[str, Any]) -> int:
    quality = parse_count(first_defined(entry, PATH_QUALITY_KEYS))
    return quality if quality else DEFAULT_QUALITY


def build_cdn_url(path: str, domain: Optional[str]) -> str:
    """
    Rend absolu un chemin relatif à un domaine CDN.

    "/v/1.mp4" ou "v/1.mp4" sur "cdn.example.com" donnent
    "https://cdn.example.com/v/1.mp4". Une URL déjà absolue est conservée.
    """
    if domain and not path.lower().startswith("http"):
        path = f"https://{domain.strip().strip('/')}/{path.lstrip('/')}"
    return fix_url(path)


def _options_from_cdn(cdn: Mapping[str, Any]) -> list[QualityOption]:
    domain = first_defined(cdn, CDN_DOMAIN_KEYS)
    domain = domain if isinstance(domain, str) and domain.strip() else None

    options: list[QualityOption] = []
    for entry in _sequence(first_defined(cdn, CDN_PATHS_KEYS)):
        if not isinstance(entry, Mapping):
            continue
        path = first_defined(entry, PATH_URL_KEYS, skip_blank=True)
        if not isinstance(path, str):
            continue
        options.append(
            QualityOption(
                quality=_quality(entry),
                video_url=build_cdn_url(path.strip(), domain),
                # La premiere entree exploitable du CDN est le flux par defaut
                is_default=not options,
            )
        )
    return options


def _direct_option(payload: Mapping[str, Any]) -> Optional[QualityOption]:
    url = first_defined(payload, DIRECT_URL_KEYS, skip_blank=True)
    if not isinstance(url, str):
        return None
    return QualityOption(quality=DEFAULT_QUALITY, video_url=fix_url(url), is_default=True)


def sort_quality_options(options: list[QualityOption]) -> list[QualityOption]:
    """
    Trie les flux : 720 d'abord, puis qualité décroissante.

    Le tri est stable : deux flux de même résolution gardent leur ordre amont.
    """
    return sorted(options, key=lambda o: (o.quality != DEFAULT_QUALITY, -o.quality))


def extract_quality_options(payload: Any) -> list[QualityOption]:
    """
    Produit la liste ordonnée des flux lisibles d'un épisode.

    Args:
        payload: Réponse épisode amont (objet attendu)

    Returns:
        Flux triés, éventuellement vide (jamais d'exception). Une liste non
        vide contient toujours au moins un flux marqué par défaut.
    """
    if not isinstance(payload, Mapping):
        return []

    options: list[QualityOption] = []
    for cdn in _sequence(first_defined(payload, CDN_LIST_KEYS)):
        if isinstance(cdn, Mapping):
            options = _options_from_cdn(cdn)
        if options:
            break

    if not options:
        direct = _direct_option(payload)
        if direct is not None:
            options = [direct]

    return sort_quality_options(options)
