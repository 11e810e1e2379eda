"""Shared fixtures for pokedex-sync tests."""

import pytest

from pokedex_sync.domain.models import CatalogRecord, CatalogSnapshot


@pytest.fixture
def sample_records() -> list[CatalogRecord]:
    """A small catalog covering the ids, names and categories used in filter tests."""
    return [
        CatalogRecord(id=1, name="bulbasaur", categories=("grass", "poison")),
        CatalogRecord(id=4, name="charmander", categories=("fire",)),
        CatalogRecord(id=7, name="squirtle", categories=("water",)),
        CatalogRecord(id=25, name="pikachu", categories=("electric",)),
        CatalogRecord(id=43, name="oddish", categories=("grass", "poison")),
        CatalogRecord(id=125, name="electabuzz", categories=("electric",)),
        CatalogRecord(id=134, name="vaporeon", categories=("water",)),
        CatalogRecord(id=136, name="flareon", categories=("fire",)),
        CatalogRecord(id=252, name="treecko", categories=("grass",)),
        CatalogRecord(id=258, name="mudkip", categories=("water",)),
    ]


@pytest.fixture
def sample_snapshot(sample_records: list[CatalogRecord]) -> CatalogSnapshot:
    """Snapshot built from ``sample_records``."""
    return CatalogSnapshot.from_records(sample_records)
