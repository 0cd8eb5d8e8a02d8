"""
Couche domaine (core).

Contient les entités canoniques, les ports (interfaces abstraites) et les objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, HTTP).

Sous-packages :
- entities/ : Entités canoniques (Drama, Episode, QualityOption, Category)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (ProviderConfig, ProviderTable)
"""
