"""
Surface HTTP entrante (FastAPI).

- routes/proxy.py : proxy brut GET /api/<chemin> vers le fournisseur choisi
- routes/catalog.py : API normalisée /catalog/... (Drama, Episode, QualityOption)
- routes/health.py : état du service et fournisseurs configurés
"""
