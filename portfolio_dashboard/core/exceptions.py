"""
Exception hierarchy for the portfolio pipeline with HTTP status mapping.

Only two failures are meant to reach a user:
- SourceUnavailableError: the holdings list could not be produced
- NotInitializedError: no snapshot has been published yet

Quote problems are absorbed by the aggregation pipeline's fallback policy.

Usage:
    from portfolio_dashboard.core.exceptions import SourceUnavailableError

    raise SourceUnavailableError("Holdings file not found", source="spreadsheet")
"""

from typing import Any


class AppError(Exception):
    """
    Base application error with HTTP status mapping.

    All custom exceptions inherit from this to enable consistent error handling.
    """

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str, **context: Any):
        """
        Initialize error with message and optional context.

        Args:
            message: Human-readable error description
            **context: Additional key-value pairs for logging (e.g., symbol, path)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON response and structured logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "status_code": self.status_code,
            **self.context,
        }


# ===== 400-level: Client Errors =====


class ValidationError(AppError):
    """Caller provided invalid input (e.g., non-positive refresh interval)."""

    status_code = 400
    error_type = "validation_error"


# ===== 500-level: Server Errors =====


class RefreshFailedError(AppError):
    """A refresh run failed for a reason other than the holdings source."""

    status_code = 500
    error_type = "refresh_failed"


class ConfigurationError(AppError):
    """
    Application misconfigured (e.g., unsupported holdings file type).

    Should be caught during startup, not during request handling.
    """

    status_code = 500
    error_type = "configuration_error"


# ===== 503: Unavailable =====


class NotInitializedError(AppError):
    """Snapshot requested before any refresh completed successfully."""

    status_code = 503
    error_type = "not_initialized"


class SourceUnavailableError(AppError):
    """
    Holdings source could not produce the holding list.

    Aborts the refresh run; the last published snapshot stays in place.
    """

    status_code = 503
    error_type = "source_unavailable"

    def __init__(self, message: str, source: str, **context: Any):
        """
        Initialize with source name for easier debugging.

        Args:
            message: Error description
            source: Source identifier (e.g., "spreadsheet", "static")
            **context: Additional context (e.g., path, row)
        """
        super().__init__(message, source=source, **context)


class QuoteUnavailableError(AppError):
    """
    Transport-level failure while fetching one symbol's quote.

    Never surfaced as a run failure: the pipeline converts it into the
    purchase-price fallback for that holding.
    """

    status_code = 503
    error_type = "quote_unavailable"

    def __init__(self, message: str, symbol: str, **context: Any):
        super().__init__(message, symbol=symbol, **context)
