"""
Dracin Stream - Proxy d'agregation pour un catalogue de dramas en streaming.

Ce package relaie les requetes du front-end vers des API de contenu tierces,
normalise leurs reponses JSON divergentes vers un schema stable
(Drama, Episode, QualityOption, Category) et sert les donnees normalisees.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités canoniques, ports, objets valeur)
- services/ : Couche application (normalisation, catalogue)
- adapters/ : Couche infrastructure (passerelle HTTP amont, CLI)
- web/ : Surface HTTP entrante (proxy brut et API normalisée)
"""
