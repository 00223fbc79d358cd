"""
Cashfree Payment Gateway proxy service.

Lambda handlers that sit between the web client and the Cashfree PG REST API,
following the three-layer layout:

- handlers: API handlers, request parsing and the response envelope
- logic: order creation and status synchronisation
- dal: Cashfree REST client and the Supabase order ledger
- models: data models and schemas
"""

__version__ = "1.0.0"
__description__ = "Cashfree Payment Gateway proxy for AWS Lambda"

# Re-export commonly used classes for convenience
from pg_proxy.models.order import OrderRecord, OrderStatus
from pg_proxy.models.input import CreateOrderRequest
from pg_proxy.models.output import CreateOrderOutput, OrderStatusOutput
from pg_proxy.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "OrderRecord",
    "OrderStatus",
    "CreateOrderRequest",
    "CreateOrderOutput",
    "OrderStatusOutput",
    "logger",
    "tracer",
    "metrics",
]
