"""
Couche infrastructure (adaptateurs).

- api/ : Passerelle HTTP vers les API de contenu amont (httpx)
- cli/ : Commandes Typer d'inspection du catalogue
"""
