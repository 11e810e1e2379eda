"""Pokedex sync service.

Keeps an in-memory Pokedex catalog synchronized from PokeAPI and
evaluates search and filter criteria over it.

This package provides:
- A bulk loader that fans out bounded concurrent detail fetches
- A sync controller with retry timer and connectivity-restored triggers
- A pure filter engine (name/id search, category OR, exclude mode)
- A FastAPI adapter exposing catalog, criteria and sync state
"""

__version__ = "0.1.0"
