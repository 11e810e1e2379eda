"""Catalog filter engine.

Pure evaluation of FilterCriteria against a record sequence. Safe to
call on every input change; the result keeps input order.
"""

import re
from typing import Callable, Iterable

from pokedex_sync.domain.models import CatalogRecord, FilterCriteria

Predicate = Callable[[CatalogRecord], bool]

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str) -> int | None:
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    return None


def compile_predicate(criteria: FilterCriteria) -> Predicate:
    """Compile criteria into a per-record predicate.

    Text is matched case-insensitively against the name. A term that is
    an integer (optionally prefixed with ``#``) also matches ids that
    contain it as a substring or equal it numerically, so ``025`` finds
    id 25.

    In exclude mode each active sub-filter is inverted and inactive
    sub-filters pass everything, so excluding nothing keeps the whole
    catalog.

    Args:
        criteria: Filter criteria.

    Returns:
        Predicate returning True for matching records.
    """
    term = criteria.search_text.strip().lower()
    clean_term = term[1:] if term.startswith("#") else term
    number = _parse_int(clean_term) if clean_term else None
    selected = criteria.selected_categories

    def matches_search(record: CatalogRecord) -> bool:
        if term in record.name.lower():
            return True
        if number is None:
            return False
        return clean_term in str(record.id) or number == record.id

    def matches_category(record: CatalogRecord) -> bool:
        if not selected:
            return True
        return any(tag in selected for tag in record.categories)

    if not criteria.exclude_mode:
        return lambda record: matches_search(record) and matches_category(record)

    def excluded(record: CatalogRecord) -> bool:
        exclude_search = not matches_search(record) if term else True
        exclude_category = not matches_category(record) if selected else True
        return exclude_search and exclude_category

    return excluded


def evaluate(
    records: Iterable[CatalogRecord], criteria: FilterCriteria
) -> list[CatalogRecord]:
    """Return the records matching ``criteria``, in input order.

    Args:
        records: Catalog records.
        criteria: Filter criteria.

    Returns:
        Matching records.
    """
    predicate = compile_predicate(criteria)
    return [record for record in records if predicate(record)]
