"""
Custom exception hierarchy for Workflow Radar.
Provides structured error handling with proper HTTP status codes and
retry eligibility so callers can pick a backoff strategy per failure kind.
"""

from typing import Any, Optional


class WorkflowRadarError(Exception):
    """Base exception for all Workflow Radar errors."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


# =============================================================================
# Configuration Errors (500)
# =============================================================================


class ConfigurationError(WorkflowRadarError):
    """Error in application configuration."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details,
            status_code=500,
        )


# =============================================================================
# Caller Data Errors (400, 413) - never retried
# =============================================================================


class InvalidRequestError(WorkflowRadarError):
    """Invalid request parameters."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="INVALID_REQUEST",
            details=details,
            status_code=400,
        )


class MalformedEventError(WorkflowRadarError):
    """Event input cannot be aggregated into workflows."""

    def __init__(
        self,
        message: str,
        event_id: Optional[str] = None,
        workflow_id: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if event_id:
            details["event_id"] = event_id
        if workflow_id:
            details["workflow_id"] = workflow_id

        super().__init__(
            message=message,
            code="MALFORMED_EVENT",
            details=details,
            status_code=400,
        )


class InputTooLongError(WorkflowRadarError):
    """Free-text input exceeds the accepted length."""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            message=f"Input is {length} characters; the maximum is {max_length}",
            code="INPUT_TOO_LONG",
            details={"length": length, "max_length": max_length},
            status_code=413,
        )


# =============================================================================
# Reasoning Capability Errors (502, 503) - retry eligible
# =============================================================================


class ReasoningError(WorkflowRadarError):
    """Base class for failures attributable to the reasoning capability."""

    retryable = True


class MalformedResponseError(ReasoningError):
    """The reasoning capability returned text that is not valid JSON."""

    def __init__(self, message: str, response_excerpt: Optional[str] = None) -> None:
        details = {"response_excerpt": response_excerpt} if response_excerpt is not None else {}
        super().__init__(
            message=message,
            code="MALFORMED_RESPONSE",
            details=details,
            status_code=502,
        )


class SchemaViolationError(ReasoningError):
    """The reasoning capability returned JSON that breaks the expected contract."""

    def __init__(self, message: str, violations: Optional[list[str]] = None) -> None:
        super().__init__(
            message=message,
            code="SCHEMA_VIOLATION",
            details={"violations": violations or []},
            status_code=502,
        )
        self.violations = violations or []


class UpstreamUnavailableError(ReasoningError):
    """The reasoning capability could not be reached or rejected the credentials."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=f"{service_name} unavailable: {message}",
            code="UPSTREAM_UNAVAILABLE",
            details={"service": service_name, **(details or {})},
            status_code=503,
        )


# =============================================================================
# Model Catalog Errors (502)
# =============================================================================


class ModelCatalogError(WorkflowRadarError):
    """Listing models from a provider failed."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(
            message=f"Failed to fetch {provider} models: {message}",
            code="MODEL_CATALOG_ERROR",
            details={"provider": provider},
            status_code=502,
        )
