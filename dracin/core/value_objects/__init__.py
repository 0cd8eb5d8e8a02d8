"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- ApiFlavor : Forme des endpoints d'un fournisseur (DOWNLOAD, ACTION)
- ProviderConfig : Fournisseur amont (nom, URL de base, forme)
- ProviderTable : Table immuable des fournisseurs avec defaut
"""

from dracin.core.value_objects.provider import (
    ApiFlavor,
    ProviderConfig,
    ProviderTable,
)

__all__ = [
    "ApiFlavor",
    "ProviderConfig",
    "ProviderTable",
]
