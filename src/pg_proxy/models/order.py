"""
Order ledger model.

This module defines the row tracked in the external orders table and the
status vocabulary shared by the creation and status handlers. Payment records
belong to the gateway and are relayed verbatim, so they have no model here.
"""

import random
import string
import time
from enum import Enum
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, Field

_BASE36 = string.digits + string.ascii_lowercase


class GatewayEnvironment(str, Enum):
    """Cashfree environment selecting the upstream base URL."""

    SANDBOX = 'SANDBOX'
    PRODUCTION = 'PRODUCTION'


class OrderStatus(str, Enum):
    """Lifecycle status stored in the orders table."""

    PENDING = 'pending'
    CREATED = 'created'
    FAILED = 'failed'
    PAID = 'paid'

    @classmethod
    def from_gateway_status(cls, gateway_status: Optional[str]) -> Optional['OrderStatus']:
        """Map a Cashfree order_status onto the ledger vocabulary, or None if unknown."""
        if not gateway_status:
            return None
        return _GATEWAY_STATUS_MAP.get(gateway_status.upper())


_GATEWAY_STATUS_MAP = {
    'PAID': OrderStatus.PAID,
    'ACTIVE': OrderStatus.CREATED,
    'EXPIRED': OrderStatus.FAILED,
    'TERMINATED': OrderStatus.FAILED,
    'TERMINATION_REQUESTED': OrderStatus.FAILED,
}


def _timestamped_id(prefix: str, suffix_length: int) -> str:
    suffix = ''.join(random.choices(_BASE36, k=suffix_length))
    return f'{prefix}_{int(time.time() * 1000)}_{suffix}'


def generate_order_id() -> str:
    """Generate an order id accepted by Cashfree (alphanumeric, underscores)."""
    return _timestamped_id('order', 9)


def generate_customer_id() -> str:
    return _timestamped_id('customer', 6)


class OrderRecord(BaseModel):
    """Row in the external orders table."""

    id: Annotated[str, Field(
        description='Internally generated order identifier, also sent upstream as order_id',
        examples=['order_1718000000000_k3j9x0a1b']
    )]

    amount: Annotated[float, Field(
        gt=0,
        allow_inf_nan=False,
        description='Order amount',
        examples=[100.0]
    )]

    currency: Annotated[str, Field(
        default='INR',
        description='ISO currency code'
    )] = 'INR'

    status: Annotated[OrderStatus, Field(
        default=OrderStatus.PENDING,
        description='Current lifecycle status'
    )] = OrderStatus.PENDING

    return_url: Annotated[Optional[str], Field(
        default=None,
        description='URL the customer is sent back to after checkout'
    )] = None

    customer_id: Annotated[Optional[str], Field(default=None)] = None

    customer_email: Annotated[Optional[str], Field(default=None)] = None

    gateway_order_id: Annotated[Optional[str], Field(
        default=None,
        description='cf_order_id assigned by the gateway'
    )] = None

    payment_session_id: Annotated[Optional[str], Field(
        default=None,
        description='Checkout session id assigned by the gateway'
    )] = None

    @classmethod
    def create(
        cls,
        amount: float,
        currency: str = 'INR',
        customer_id: Optional[str] = None,
        customer_email: Optional[str] = None,
        return_url: Optional[str] = None,
    ) -> 'OrderRecord':
        """
        Create a pending order with a freshly generated identifier.

        Args:
            amount: Order amount
            currency: ISO currency code
            customer_id: Gateway customer identifier
            customer_email: Customer email address
            return_url: Checkout return URL

        Returns:
            New OrderRecord in pending status
        """
        return cls(
            id=generate_order_id(),
            amount=amount,
            currency=currency,
            status=OrderStatus.PENDING,
            return_url=return_url,
            customer_id=customer_id,
            customer_email=customer_email,
        )

    def to_row(self) -> Dict[str, Any]:
        """Serialize for insertion into the orders table."""
        return self.model_dump(mode='json')
