"""
REST API resolver factory for the payment gateway handlers.

Each deployed function owns one resolver. Routes are registered as catch-all
patterns for the methods the function serves, so an unmatched request can
only mean an unsupported method: it is answered with 405. CORS preflight
(OPTIONS) is answered with 204 and the permissive header set whether or not
the request carries an Origin header.
"""

from typing import Dict, List

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig, Response
from aws_lambda_powertools.event_handler.exceptions import NotFoundError

from pg_proxy.handlers.utils.envelope import error_response
from pg_proxy.handlers.utils.errors import BaseServiceError, ErrorSeverity, MethodNotAllowedError
from pg_proxy.handlers.utils.observability import logger

# Matches any path; identifiers are read from the path by the parameter resolver
CATCH_ALL_PATH = '.+'

CORS_ALLOW_HEADERS = ['authorization', 'x-client-info', 'apikey', 'content-type']
CORS_MAX_AGE = 600


def _preflight_headers(allowed_methods: List[str]) -> Dict[str, str]:
    # Powertools only adds CORS headers when the request has an Origin
    return {
        'Access-Control-Allow-Origin': '*',
        'Access-Control-Allow-Headers': ','.join(CORS_ALLOW_HEADERS),
        'Access-Control-Allow-Methods': ','.join(sorted({*allowed_methods, 'OPTIONS'})),
        'Access-Control-Max-Age': str(CORS_MAX_AGE),
    }


def create_resolver(allowed_methods: List[str]) -> APIGatewayRestResolver:
    """
    Create a resolver with CORS and the shared error envelope handlers.

    Args:
        allowed_methods: HTTP methods the function serves, e.g. ["GET"]

    Returns:
        Configured APIGatewayRestResolver; the caller registers its routes
    """
    cors_config = CORSConfig(
        allow_origin='*',
        allow_headers=CORS_ALLOW_HEADERS,
        max_age=CORS_MAX_AGE,
    )
    app = APIGatewayRestResolver(cors=cors_config)
    preflight_headers = _preflight_headers(allowed_methods)

    @app.route(CATCH_ALL_PATH, method=['OPTIONS'])
    def preflight() -> Response:
        return Response(status_code=204, content_type=None, headers=dict(preflight_headers), body='')

    @app.not_found
    def method_not_allowed(exc: NotFoundError) -> Response:
        method = app.current_event.http_method.upper()
        logger.warning('Method not allowed', extra={'http_method': method, 'allowed_methods': allowed_methods})
        return error_response(MethodNotAllowedError(method, allowed_methods))

    @app.exception_handler(BaseServiceError)
    def handle_service_error(exc: BaseServiceError) -> Response:
        return error_response(exc)

    @app.exception_handler(Exception)
    def handle_unexpected_error(exc: Exception) -> Response:
        logger.exception('Unexpected error in handler', extra={'error': str(exc)})
        return error_response(BaseServiceError(
            message='Internal server error',
            error_code='INTERNAL_SERVER_ERROR',
            severity=ErrorSeverity.CRITICAL,
        ))

    return app
