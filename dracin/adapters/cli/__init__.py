"""
Commandes CLI d'inspection du catalogue.

Les commandes affichent les enregistrements normalises (Rich) pour verifier
le comportement d'un fournisseur sans passer par le front-end.
"""
