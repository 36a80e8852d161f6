"""Errors raised by clients of external services."""


class ExternalServiceError(Exception):
    """An external call failed; callers fall back to form-only data."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuditServiceError(ExternalServiceError):
    """The website audit request failed or timed out."""


class ReportWebhookError(ExternalServiceError):
    """The email-report webhook rejected the request or timed out."""
