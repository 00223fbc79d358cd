"""
AWS Lambda Handlers Module.

One module per deployed function. Each module owns an APIGatewayRestResolver
built by `create_resolver` and exposes `lambda_handler`:

- create_order_handler: pg-create-order (POST create, GET fetch)
- fetch_order_handler: pg-fetch-order
- fetch_payment_handler: pg-order-fetch-payment
- fetch_payments_handler: pg-order-fetch-payments
- order_status_handler: pg-get-order
"""

# Re-export handler utilities for convenience
from pg_proxy.handlers.utils.observability import logger, tracer, metrics
from pg_proxy.handlers.utils.rest_api_resolver import create_resolver, CATCH_ALL_PATH

__all__ = [
    "logger",
    "tracer",
    "metrics",
    "create_resolver",
    "CATCH_ALL_PATH",
]
