"""Catalog loading and filtering."""

from pokedex_sync.catalog.filters import compile_predicate, evaluate
from pokedex_sync.catalog.loader import BulkLoader, record_from_detail, resolve_image_ref

__all__ = [
    # Loader
    "BulkLoader",
    "record_from_detail",
    "resolve_image_ref",
    # Filters
    "compile_predicate",
    "evaluate",
]
