"""Domain layer - catalog records, filter criteria, sync state machine.

- **Models**: CatalogRecord, CatalogSnapshot, FilterCriteria
- **State Machine**: SyncStatus transitions and the SyncState value
- **Exceptions**: load failures and invalid transitions
"""

from pokedex_sync.domain.exceptions import (
    CatalogLoadError,
    DetailFetchFailedError,
    DomainError,
    IndexFetchFailedError,
    InvalidStateTransitionError,
)
from pokedex_sync.domain.models import CatalogRecord, CatalogSnapshot, FilterCriteria
from pokedex_sync.domain.state_machines import (
    SyncState,
    SyncStatus,
    validate_sync_transition,
)

__all__ = [
    # Models
    "CatalogRecord",
    "CatalogSnapshot",
    "FilterCriteria",
    # State machine
    "SyncState",
    "SyncStatus",
    "validate_sync_transition",
    # Exceptions
    "CatalogLoadError",
    "DetailFetchFailedError",
    "DomainError",
    "IndexFetchFailedError",
    "InvalidStateTransitionError",
]
