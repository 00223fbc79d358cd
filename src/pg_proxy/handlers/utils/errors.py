"""
Error taxonomy for the payment gateway handlers.

Every failure a handler can report is a subclass of BaseServiceError carrying
the HTTP status code and the message that ends up in the response envelope.
Nothing here is retried: each error is terminal for the current request.
"""

import uuid
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit

from pg_proxy.handlers.utils.observability import logger, metrics, tracer


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    CONFIGURATION = "CONFIGURATION"
    VALIDATION = "VALIDATION"
    METHOD = "METHOD"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    DATASTORE = "DATASTORE"
    INTERNAL = "INTERNAL"


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.severity = severity
        self.category = category
        self.details = details
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "category": self.category.value,
            "details": self.details,
        }


class ParameterError(BaseServiceError):
    """Raised when a required identifier is missing or the body cannot be read."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            error_code="MISSING_PARAMETER",
            status_code=400,
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            details=details,
        )


class RequestValidationError(BaseServiceError):
    """Raised when a request body fails model validation."""

    def __init__(self, message: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            details=field_errors or None,
        )
        self.field_errors = field_errors or []


class MethodNotAllowedError(BaseServiceError):
    """Raised when a handler receives an HTTP method it does not serve."""

    def __init__(self, method: str, allowed_methods: List[str]):
        allowed = ", ".join(allowed_methods)
        super().__init__(
            message=f"Method not allowed. Only {allowed} requests are supported.",
            error_code="METHOD_NOT_ALLOWED",
            status_code=405,
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.METHOD,
        )
        self.method = method


class ConfigurationError(BaseServiceError):
    """Raised when required settings are missing or invalid."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            status_code=500,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            details=details,
        )


class UpstreamError(BaseServiceError):
    """Raised when the payment gateway call fails or returns an unusable response."""

    def __init__(self, message: str, upstream_status: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(
            message=message,
            error_code="UPSTREAM_ERROR",
            status_code=500,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
            details=details,
        )
        self.upstream_status = upstream_status


class LedgerError(BaseServiceError):
    """Raised when the order ledger cannot be written."""

    def __init__(self, message: str, operation: str):
        super().__init__(
            message=message,
            error_code="LEDGER_ERROR",
            status_code=500,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.DATASTORE,
        )
        self.operation = operation


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""
    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value.title().replace('_', '')}", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_annotation("error_category", error.category.value)
    tracer.put_metadata("error_details", error.to_dict())

    log_extra = {
        "error_id": error.error_id,
        "error_code": error.error_code,
        "error_severity": error.severity.value,
        "error_category": error.category.value,
        "error_message": error.message,
        "status_code": error.status_code,
    }
    if error.status_code >= 500:
        logger.error("Service error occurred", extra=log_extra)
    else:
        logger.warning("Request rejected", extra=log_extra)
