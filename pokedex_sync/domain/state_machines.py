"""Sync state machine.

Deterministic transitions for the catalog synchronization lifecycle.
The controller validates every transition against this table before
applying it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from pokedex_sync.domain.exceptions import InvalidStateTransitionError


class SyncStatus(str, Enum):
    """Catalog sync lifecycle states.

    State diagram:
        LOADING ──── load failed ───► DEGRADED ◄──┐
          │  ▲                          │   │     │ retry failed
          │  │ manual reload            │   └─────┘
          │  │                          │
          │ load ok                     │ retry ok
          ▼  │                          │
        READY ◄─────────────────────────┘
    """

    LOADING = "loading"
    READY = "ready"
    DEGRADED = "degraded"

    def can_transition_to(self, target: "SyncStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _SYNC_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["SyncStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return sorted(_SYNC_TRANSITIONS.get(self, set()), key=lambda s: s.value)

    def is_retrying(self) -> bool:
        """Check if retries are scheduled in this state."""
        return self is SyncStatus.DEGRADED


_SYNC_TRANSITIONS: dict[SyncStatus, set[SyncStatus]] = {
    SyncStatus.LOADING: {SyncStatus.READY, SyncStatus.DEGRADED},
    SyncStatus.DEGRADED: {SyncStatus.DEGRADED, SyncStatus.READY},
    SyncStatus.READY: {SyncStatus.LOADING},  # Manual reload only
}


@dataclass(frozen=True)
class SyncState:
    """Current sync state as observed by readers.

    Attributes:
        status: Lifecycle state.
        attempt: Consecutive failed attempts (0 unless degraded).
        last_error: Message of the last index failure, if degraded.
    """

    status: SyncStatus
    attempt: int = 0
    last_error: str | None = None

    @classmethod
    def loading(cls) -> Self:
        return cls(status=SyncStatus.LOADING)

    @classmethod
    def ready(cls) -> Self:
        return cls(status=SyncStatus.READY)

    @classmethod
    def degraded(cls, attempt: int, last_error: str) -> Self:
        return cls(status=SyncStatus.DEGRADED, attempt=attempt, last_error=last_error)


def validate_sync_transition(current_status: SyncStatus, target_status: SyncStatus) -> None:
    """Validate and raise if a sync state transition is invalid.

    Args:
        current_status: Current sync status.
        target_status: Target sync status.

    Raises:
        InvalidStateTransitionError: If transition is not valid.
    """
    if not current_status.can_transition_to(target_status):
        raise InvalidStateTransitionError(
            current_state=current_status.value,
            target_state=target_status.value,
            allowed_transitions=[s.value for s in current_status.allowed_transitions()],
        )
