"""
Fonctions utilitaires partagees dans le projet Dracin Stream.

Ce module centralise les conversions totales utilisees par les normaliseurs :
- first_defined : premiere valeur non nulle d'une chaine de cles
- fix_url : reparation des URLs relatives ou mal formees en HTTPS absolu
- parse_rating / parse_year / parse_count : nettoyage des valeurs numeriques
- parse_view_count : conversion des compteurs abreges ("1.2M", "750K")

Aucune de ces fonctions ne leve d'exception : une entree inattendue
retourne la valeur par defaut documentee.
"""

import math
import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, Optional

from dracin.utils.constants import (
    COUNT_UNIT_MULTIPLIERS,
    MAX_YEAR_AHEAD,
    MIN_PLAUSIBLE_YEAR,
    RATING_MAX,
    RATING_MIN,
)

_VIEW_COUNT_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([MK])?\s*$", re.IGNORECASE)
_SCHEME_PATTERN = re.compile(r"^https?:/*", re.IGNORECASE)
_BARE_HOST_PATTERN = re.compile(r"^[a-z0-9-]+(\.[a-z0-9-]+)+(:\d+)?/", re.IGNORECASE)
_LEADING_YEAR_PATTERN = re.compile(r"^\s*(\d{4})")


def first_defined(
    data: Mapping[str, Any],
    keys: Iterable[str],
    default: Any = None,
    skip_blank: bool = False,
) -> Any:
    """
    Retourne la premiere valeur definie (non None) parmi les cles donnees.

    Args:
        data: Objet JSON amont
        keys: Cles candidates, par ordre de priorite
        default: Valeur retournee si aucune cle ne correspond
        skip_blank: Ignore aussi les chaines vides ou faites d'espaces

    Returns:
        La premiere valeur trouvee, ou default
    """
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if skip_blank and isinstance(value, str) and not value.strip():
            continue
        return value
    return default


def _is_number(value: Any) -> bool:
    """Vrai pour int/float finis et representables en float, faux pour les booleens."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        try:
            return math.isfinite(float(value))
        except OverflowError:
            return False
    return False


def _to_float(value: Any) -> Optional[float]:
    """Convertit un nombre ou une chaine numerique en float, sinon None."""
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _round_half_up(number: float) -> int:
    """Arrondi a l'entier le plus proche, les demis vers le haut."""
    return int(math.floor(number + 0.5))


def fix_url(url: Any, base_url: Optional[str] = None) -> str:
    """
    Repare une URL amont pour la rendre directement chargeable.

    - vide ou non chaine -> ""
    - protocole relatif ("//cdn/x.jpg") -> "https://cdn/x.jpg"
    - http ou schema mal forme ("https:/x", "http:x") -> "https://x"
    - hote nu ("cdn.example.com/x.jpg") -> "https://cdn.example.com/x.jpg"
    - chemin absolu ("/x.jpg") -> joint a base_url si fourni, sinon inchange

    Args:
        url: Valeur amont (chaine attendue)
        base_url: Origine optionnelle pour les chemins relatifs

    Returns:
        URL absolue en HTTPS, ou chaine vide
    """
    if not isinstance(url, str):
        return ""
    url = url.strip()
    if not url:
        return ""

    if url.startswith("//"):
        return "https://" + url.lstrip("/")

    if _SCHEME_PATTERN.match(url):
        return _SCHEME_PATTERN.sub("https://", url, count=1)

    if _BARE_HOST_PATTERN.match(url):
        return f"https://{url}"

    if base_url:
        return f"{fix_url(base_url).rstrip('/')}/{url.lstrip('/')}"

    return url


def parse_rating(value: Any) -> float:
    """
    Ramene une note amont sur l'echelle d'affichage 0-10.

    Les valeurs hors bornes sont ecretees, les valeurs non numeriques
    donnent 0.
    """
    number = _to_float(value)
    if number is None:
        return RATING_MIN
    return min(max(number, RATING_MIN), RATING_MAX)


def parse_year(value: Any) -> int:
    """
    Nettoie une annee de sortie.

    Accepte un entier, un flottant entier ou une chaine commencant par
    quatre chiffres ("2023", "2023-05-01"). Les annees non plausibles
    (avant 1900 ou trop loin dans le futur) donnent la sentinelle 0.
    """
    year: Optional[int] = None
    if _is_number(value) and float(value).is_integer():
        year = int(value)
    elif isinstance(value, str):
        match = _LEADING_YEAR_PATTERN.match(value)
        if match:
            year = int(match.group(1))

    if year is None:
        return 0
    if year < MIN_PLAUSIBLE_YEAR or year > date.today().year + MAX_YEAR_AHEAD:
        return 0
    return year


def parse_count(value: Any) -> Optional[int]:
    """
    Convertit un compteur amont en entier positif.

    Returns:
        L'entier arrondi, ou None si la valeur est absente, negative
        ou non numerique
    """
    number = _to_float(value)
    if number is None or number < 0:
        return None
    return _round_half_up(number)


def parse_view_count(value: Any) -> Optional[int]:
    """
    Convertit un nombre de vues, eventuellement abrege.

    "1.2M" -> 1200000, "750K" -> 750000, "42" -> 42, 42.4 -> 42.
    Une chaine qui ne suit pas le motif <nombre>[.<nombre>](M|K)? donne None.
    """
    if _is_number(value):
        return parse_count(value)
    if not isinstance(value, str):
        return None

    match = _VIEW_COUNT_PATTERN.match(value)
    if not match:
        return None

    number = float(match.group(1))
    unit = match.group(2)
    if unit:
        number *= COUNT_UNIT_MULTIPLIERS[unit.upper()]
    if not math.isfinite(number):
        return None
    return _round_half_up(number)
