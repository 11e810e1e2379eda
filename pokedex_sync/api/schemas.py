"""API request and response schemas."""

from typing import Sequence

from pydantic import BaseModel, Field

from pokedex_sync.domain.models import CatalogRecord, FilterCriteria
from pokedex_sync.domain.state_machines import SyncState


class SyncStateResponse(BaseModel):
    """Current sync state."""

    status: str
    attempt: int
    last_error: str | None = None

    @classmethod
    def from_domain(cls, state: SyncState) -> "SyncStateResponse":
        return cls(
            status=state.status.value,
            attempt=state.attempt,
            last_error=state.last_error,
        )


class CatalogRecordResponse(BaseModel):
    """One catalog record as rendered to clients."""

    id: int
    display_id: str
    name: str
    categories: list[str]
    primary_category: str
    image_ref: str

    @classmethod
    def from_domain(cls, record: CatalogRecord) -> "CatalogRecordResponse":
        return cls(
            id=record.id,
            display_id=record.display_id,
            name=record.name,
            categories=list(record.categories),
            primary_category=record.primary_category,
            image_ref=record.image_ref,
        )


class CatalogResponse(BaseModel):
    """A sequence of catalog records with its length."""

    count: int
    items: list[CatalogRecordResponse]

    @classmethod
    def from_records(cls, records: Sequence[CatalogRecord]) -> "CatalogResponse":
        return cls(
            count=len(records),
            items=[CatalogRecordResponse.from_domain(r) for r in records],
        )


class CategoriesResponse(BaseModel):
    """Distinct category tags in the current catalog."""

    categories: list[str]


class FilterCriteriaSchema(BaseModel):
    """Filter criteria as exchanged with clients."""

    search_text: str = Field(default="", description="Name or id search, e.g. 'pika' or '#25'")
    selected_categories: list[str] = Field(
        default_factory=list,
        description="Category tags combined with OR semantics",
    )
    exclude_mode: bool = Field(default=False, description="Invert the active filters")

    def to_domain(self) -> FilterCriteria:
        return FilterCriteria(
            search_text=self.search_text,
            selected_categories=frozenset(self.selected_categories),
            exclude_mode=self.exclude_mode,
        )

    @classmethod
    def from_domain(cls, criteria: FilterCriteria) -> "FilterCriteriaSchema":
        return cls(
            search_text=criteria.search_text,
            selected_categories=sorted(criteria.selected_categories),
            exclude_mode=criteria.exclude_mode,
        )


class ErrorResponse(BaseModel):
    """Uniform error body."""

    error_code: str
    message: str
    details: list | dict = Field(default_factory=list)
