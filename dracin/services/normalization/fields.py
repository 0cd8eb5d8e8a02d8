"""
Chaînes de repli par champ canonique.

Chaque champ canonique est décrit par une ligne FieldRule : les clés amont
candidates dans l'ordre de priorité, la valeur par défaut et la conversion.
Ajouter un fournisseur qui nomme un champ autrement revient à ajouter une
clé à la ligne concernée.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from dracin.utils.helpers import first_defined


@dataclass(frozen=True)
class FieldRule:
    """
    Règle de résolution d'un champ canonique.

    Attributs :
        keys : Clés amont candidates, la première valeur non nulle gagne
        default : Valeur utilisée si aucune clé ne correspond
        convert : Conversion appliquée à la valeur retenue (ou au défaut)
        skip_blank : Traite les chaînes vides comme absentes
    """

    keys: tuple[str, ...]
    default: Any = None
    convert: Optional[Callable[[Any], Any]] = None
    skip_blank: bool = False

    def resolve(self, data: Mapping[str, Any]) -> Any:
        value = first_defined(data, self.keys, default=self.default, skip_blank=self.skip_blank)
        if self.convert is not None:
            return self.convert(value)
        return value


def as_text(value: Any) -> str:
    """Convertit un scalaire JSON en texte ; objets et listes donnent ""."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        try:
            return str(value)
        except ValueError:
            # Entier au-dela de la limite de conversion en chaine
            return ""
    return ""


def as_optional_text(value: Any) -> Optional[str]:
    """Comme as_text, mais None pour une valeur vide."""
    text = as_text(value)
    return text or None


def resolve_fields(data: Mapping[str, Any], rules: Mapping[str, FieldRule]) -> dict[str, Any]:
    """Applique une table de règles et retourne {champ: valeur}."""
    return {name: rule.resolve(data) for name, rule in rules.items()}
