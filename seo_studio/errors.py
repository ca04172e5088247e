"""
Audit error taxonomy.

Every failure surfaced to the dashboard is an AuditError subclass, and
describe_error() reduces any exception to a (message, type) pair the UI can show.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Connection timed out."
RATE_LIMIT_MESSAGE = "Engine is busy. Try again soon."
AUDIT_FAILED_MESSAGE = "Audit failed. Check source accessibility."
NOT_CONFIGURED_MESSAGE = "Audit service is not configured."
GENERIC_FAILURE_MESSAGE = "Audit failed."


class AuditError(Exception):
    """Base exception for audit and assistant failures."""

    error_type = "error"

    def __init__(self, message: str, error_type: str = None):
        super().__init__(message)
        self.message = message
        if error_type is not None:
            self.error_type = error_type


class InputValidationError(AuditError):
    """Input rejected before any provider call."""


class AuditTimeoutError(AuditError):
    """Provider did not answer within the audit timeout."""

    error_type = "timeout"

    def __init__(self, message: str = "TIMEOUT"):
        super().__init__(message)


class RateLimitError(AuditError):
    """Provider reported it is over capacity (HTTP 429)."""

    error_type = "limit"


class AuditFailureError(AuditError):
    """Provider answered but produced no usable variants."""


class ProviderConfigError(AuditError):
    """Provider selected but its credentials are not configured."""


class ProviderError(AuditError):
    """Provider SDK call failed."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class ErrorReport:
    message: str
    type: str

    def to_dict(self) -> dict:
        return {"error": self.message, "type": self.type}


def describe_error(exc: BaseException) -> ErrorReport:
    """Map a failure to the message and category shown to the user."""
    text = str(exc) or ""

    if isinstance(exc, AuditTimeoutError):
        return ErrorReport(TIMEOUT_MESSAGE, "timeout")
    if isinstance(exc, RateLimitError) or "429" in text:
        return ErrorReport(RATE_LIMIT_MESSAGE, "limit")
    if isinstance(exc, AuditFailureError):
        return ErrorReport(AUDIT_FAILED_MESSAGE, "error")
    if isinstance(exc, ProviderConfigError):
        return ErrorReport(NOT_CONFIGURED_MESSAGE, "error")
    if isinstance(exc, InputValidationError):
        return ErrorReport(text, "error")

    return ErrorReport(text or GENERIC_FAILURE_MESSAGE, "error")


def describe_unexpected_error(exc: BaseException) -> ErrorReport:
    """
    Report for a failure outside the AuditError hierarchy.

    The exception text is never repeated, only the 429 classification is kept.
    """
    report = describe_error(exc)
    if report.type == "limit":
        return report
    return ErrorReport(GENERIC_FAILURE_MESSAGE, "error")
