"""Domain exceptions.

All domain-level errors raised by the catalog loader and the sync
state machine. Infrastructure errors are converted into these at the
loader boundary so the application layer only handles domain errors.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when an invalid sync state transition is attempted."""

    def __init__(
        self,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            current_state: Current sync status.
            target_state: Attempted target status.
            allowed_transitions: Statuses reachable from the current one.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition sync state from '{current_state}' "
            f"to '{target_state}'. Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Catalog Load Errors
# ============================================================================


class CatalogLoadError(DomainError):
    """Base class for catalog loading errors."""

    pass


class IndexFetchFailedError(CatalogLoadError):
    """Raised when the bulk index request fails.

    Fatal to the current load attempt: no partial catalog is produced.
    """

    def __init__(self, limit: int, reason: str, status_code: int | None = None) -> None:
        """Initialize index fetch failure.

        Args:
            limit: Page-size limit that was requested.
            reason: Description of the underlying failure.
            status_code: HTTP status, if a response was received.
        """
        super().__init__(
            f"Index request failed (limit={limit}): {reason}",
            details={"limit": limit, "reason": reason, "status_code": status_code},
        )
        self.limit = limit
        self.reason = reason
        self.status_code = status_code


class DetailFetchFailedError(CatalogLoadError):
    """Raised when one detail request fails or returns an unusable record.

    Never surfaced past the loader; the record is dropped.
    """

    def __init__(self, url: str, reason: str) -> None:
        """Initialize detail fetch failure.

        Args:
            url: Detail locator that failed.
            reason: Description of the underlying failure.
        """
        super().__init__(
            f"Detail request failed for {url}: {reason}",
            details={"url": url, "reason": reason},
        )
        self.url = url
        self.reason = reason
