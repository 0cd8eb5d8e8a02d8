"""
Objets valeur pour la configuration des fournisseurs amont.

La table des fournisseurs est construite une fois depuis la configuration
puis passée à la passerelle : elle n'est jamais modifiée en cours d'exécution.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class ApiFlavor(Enum):
    """
    Forme des endpoints exposés par un fournisseur.

    DOWNLOAD : listes nues ou enveloppées dans {data}, détail et épisodes
               via download/<bookId> ({info, data})
    ACTION : chaque appel porte action=<nom>, réponses {success, data}
    """

    DOWNLOAD = "download"
    ACTION = "action"


@dataclass(frozen=True)
class ProviderConfig:
    """
    Fournisseur amont sélectionnable.

    Attributs :
        name : Identifiant passé dans le paramètre ?provider=
        base_url : URL de base, sans barre finale
        flavor : Forme des endpoints (voir ApiFlavor)
    """

    name: str
    base_url: str
    flavor: ApiFlavor = ApiFlavor.DOWNLOAD

    def url_for(self, path: str) -> str:
        """Concatène l'URL de base et un chemin logique ("home", "download/42")."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True)
class ProviderTable:
    """
    Table immuable des fournisseurs, avec un fournisseur par défaut.

    Un nom inconnu ou absent résout vers le fournisseur par défaut :
    la sélection est statique, sans bascule selon la santé de l'amont.
    """

    providers: Mapping[str, ProviderConfig]
    default: str

    def __post_init__(self) -> None:
        if self.default not in self.providers:
            raise ValueError(f"Fournisseur par defaut inconnu: {self.default!r}")
        object.__setattr__(self, "providers", MappingProxyType(dict(self.providers)))

    @classmethod
    def from_configs(cls, configs: list[ProviderConfig], default: str) -> "ProviderTable":
        return cls(providers={c.name: c for c in configs}, default=default)

    def resolve(self, name: Optional[str] = None) -> ProviderConfig:
        """Retourne le fournisseur demandé, ou le fournisseur par défaut."""
        if name and name in self.providers:
            return self.providers[name]
        return self.providers[self.default]

    def __contains__(self, name: object) -> bool:
        return name in self.providers

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.providers)
