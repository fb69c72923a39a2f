"""Exception hierarchy for the Gaari maintenance tools.

Exception categories:
- Configuration errors (invalid settings, bad venue registry)
- Fetch errors (HTTP status, timeout)
- Storage errors (event store unreachable, single row update failed)

Only StoreUnavailableError aborts a reconciliation run. Every other error is
recovered per row and shows up in the run report counts.
"""


class GaariError(Exception):
    """Base exception for all Gaari errors."""

    def __init__(self, message: str, source: str | None = None, details: dict | None = None):
        self.source = source
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        if self.source:
            msg = f"[{self.source}] {msg}"
        return msg


# ============================================================
# CONFIGURATION ERRORS
# ============================================================


class ConfigurationError(GaariError):
    """Base class for configuration-related errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        details = {"field": field} if field else {}
        super().__init__(message, details=details)


class InvalidVenueRegistryError(ConfigurationError):
    """Raised when the venue registry table cannot be loaded."""

    def __init__(self, message: str, venue: str | None = None, path: str | None = None):
        self.venue = venue
        self.path = path
        super().__init__(message, source=path, details={"venue": venue})


# ============================================================
# FETCH ERRORS
# ============================================================


class FetchError(GaariError):
    """Base class for page fetching errors."""
    pass


class HTTPError(FetchError):
    """Raised for non-success HTTP responses."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        self.status_code = status_code
        self.url = url
        details = {}
        if status_code:
            details["status_code"] = status_code
        if url:
            details["url"] = url
        super().__init__(message, details=details)


class FetchTimeoutError(FetchError):
    """Raised when a page request times out."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(
            f"Request timed out after {timeout}s",
            details={"url": url, "timeout": timeout},
        )


# ============================================================
# STORAGE ERRORS
# ============================================================


class StorageError(GaariError):
    """Base class for event store errors."""
    pass


class StoreUnavailableError(StorageError):
    """Raised when the initial read of a run fails. Fatal for the run."""

    def __init__(self, message: str, table: str | None = None):
        self.table = table
        super().__init__(message, details={"table": table})


class RowUpdateError(StorageError):
    """Raised when a single row update is rejected. Not fatal for the run."""

    def __init__(self, event_id: str, message: str, fields: list[str] | None = None):
        self.event_id = event_id
        self.fields = fields or []
        super().__init__(
            f"Update of event {event_id} failed: {message}",
            details={"event_id": event_id, "fields": self.fields},
        )
