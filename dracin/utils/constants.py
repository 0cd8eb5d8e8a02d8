"""
Constantes globales pour Dracin Stream.

Ce module contient toutes les constantes utilisees dans l'application:
- Valeurs par defaut des enregistrements canoniques
- Bornes de la note et des annees plausibles
- Resolution par defaut des flux video
- Identite HTTP envoyee aux API amont
"""

# Nom affiche quand l'amont ne fournit aucun titre
UNKNOWN_BOOK_NAME = "Unknown"

# Echelle d'affichage des notes (0-10)
RATING_MIN = 0.0
RATING_MAX = 10.0

# Annees acceptees par le nettoyage (0 = inconnue)
MIN_PLAUSIBLE_YEAR = 1900
MAX_YEAR_AHEAD = 2

# Resolution consideree comme flux par defaut (la plus compatible)
DEFAULT_QUALITY = 720

# Multiplicateurs des compteurs abreges ("1.2M", "750K")
COUNT_UNIT_MULTIPLIERS = {
    "K": 1_000,
    "M": 1_000_000,
}

# En-tetes des requetes sortantes
USER_AGENT = "Dracin-Stream/2.0"
ACCEPT_HEADER = "application/json"

# URL de base observee pour les deux fournisseurs
DEFAULT_UPSTREAM_BASE_URL = "https://kdjekek-usieke-owjejxkek-iwjwjxkod.vercel.app/api"

# Parametres de requete jamais transmis a l'amont
RESERVED_QUERY_PARAMS = frozenset({"path", "provider"})

# Alias de categories du front-end vers les listes amont
CATEGORY_ALIASES = {
    "trending": "home",
    "latest": "home",
    "dubindo": "home",
    "foryou": "recommend",
    "populersearch": "recommend",
    "vip": "vip",
}
