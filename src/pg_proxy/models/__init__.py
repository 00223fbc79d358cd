"""
Data models for the payment gateway proxy.

- order: ledger row, lifecycle status, gateway environment
- input: request bodies
- output: envelope payloads
"""

from pg_proxy.models.input import CreateOrderRequest, CustomerDetails, OrderItem, OrderMeta
from pg_proxy.models.order import GatewayEnvironment, OrderRecord, OrderStatus
from pg_proxy.models.output import CreateOrderOutput, OrderStatusOutput

__all__ = [
    "CreateOrderRequest",
    "CustomerDetails",
    "OrderItem",
    "OrderMeta",
    "GatewayEnvironment",
    "OrderRecord",
    "OrderStatus",
    "CreateOrderOutput",
    "OrderStatusOutput",
]
