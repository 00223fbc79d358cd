"""
Uniform response envelope.

Every handler answers with `{success, data, message}` on success or
`{success: false, error[, details]}` on failure.
"""

from typing import Any

from aws_lambda_powertools.event_handler import Response, content_types
from aws_lambda_powertools.metrics import MetricUnit

from pg_proxy.handlers.utils.errors import BaseServiceError, log_error_metrics
from pg_proxy.handlers.utils.observability import logger, metrics


def success_response(data: Any, message: str, **extra: Any) -> Response:
    """
    Build a 200 envelope around an upstream payload.

    Args:
        data: Payload relayed to the caller
        message: Human readable summary, e.g. "Order fetched successfully"
        **extra: Additional top-level members (e.g. isPaid)

    Returns:
        Powertools Response with a JSON body
    """
    metrics.add_metric(name="RequestSuccess", unit=MetricUnit.Count, value=1)
    logger.info(message)

    return Response(
        status_code=200,
        content_type=content_types.APPLICATION_JSON,
        body={"success": True, "data": data, "message": message, **extra},
    )


def error_response(error: BaseServiceError) -> Response:
    """Build the failure envelope for a service error and record it."""
    log_error_metrics(error)

    body: dict[str, Any] = {"success": False, "error": error.message}
    if error.details is not None:
        body["details"] = error.details

    return Response(
        status_code=error.status_code,
        content_type=content_types.APPLICATION_JSON,
        body=body,
    )
