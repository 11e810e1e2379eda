"""Catalog entity model.

Passive data shapes shared by the loader, the filter engine and the
sync controller. Records and snapshots are immutable; criteria are
replaced wholesale rather than edited in place.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Self


@dataclass(frozen=True)
class CatalogRecord:
    """One entity of the catalog, built from a detail response.

    Attributes:
        id: Stable external identifier (positive).
        name: Lowercase name token.
        categories: Ordered category tags. Order matters for display only.
        image_ref: Artwork reference, empty when the source had none.
    """

    id: int
    name: str
    categories: tuple[str, ...]
    image_ref: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise ValueError(f"Record id must be a positive integer, got {self.id!r}")
        if not self.name:
            raise ValueError("Record name must not be empty")
        if not self.categories:
            raise ValueError(f"Record {self.id} has no categories")

    @property
    def display_id(self) -> str:
        """Identifier as shown to users, e.g. ``#025``."""
        return f"#{self.id:03d}"

    @property
    def primary_category(self) -> str:
        """First category tag, used by renderers for colouring."""
        return self.categories[0]


@dataclass(frozen=True)
class CatalogSnapshot:
    """A fully loaded record set plus its derived category catalog.

    The category set is always computed from the records, so the two
    can never diverge. Replacing the catalog means replacing the whole
    snapshot.
    """

    records: tuple[CatalogRecord, ...] = ()
    categories: frozenset[str] = frozenset()

    @classmethod
    def from_records(cls, records: Iterable[CatalogRecord]) -> Self:
        """Build a snapshot and derive its category catalog.

        Args:
            records: Records in catalog order.

        Returns:
            New snapshot.
        """
        records = tuple(records)
        categories = frozenset(tag for record in records for tag in record.categories)
        return cls(records=records, categories=categories)

    @classmethod
    def empty(cls) -> Self:
        """Snapshot used before the first successful load."""
        return cls()

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class FilterCriteria:
    """User-controlled search and filter settings.

    Selected categories need not exist in the current catalog; stale
    selections after a reload simply match nothing.

    Attributes:
        search_text: Free text matched against names and ids.
        selected_categories: Category tags combined with OR semantics.
        exclude_mode: Invert the active sub-filters.
    """

    search_text: str = ""
    selected_categories: frozenset[str] = field(default_factory=frozenset)
    exclude_mode: bool = False

    def toggle_category(self, tag: str) -> Self:
        """Return criteria with ``tag`` added, or removed if already selected."""
        if tag in self.selected_categories:
            selected = self.selected_categories - {tag}
        else:
            selected = self.selected_categories | {tag}
        return replace(self, selected_categories=selected)

    def cleared(self) -> Self:
        """Return default criteria (no text, no categories, include mode)."""
        return type(self)()
