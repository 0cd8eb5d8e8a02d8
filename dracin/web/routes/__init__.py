"""Routeurs FastAPI de Dracin Stream."""
