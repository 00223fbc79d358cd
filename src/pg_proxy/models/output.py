"""
Output models for handler responses using Pydantic.

These shape the `data` member (and the extra top-level members) of the
success envelope. Serialization uses camelCase aliases.
"""

from typing import Annotated, Optional

from pydantic import Field

from pg_proxy.models.input import CamelModel


class CreateOrderOutput(CamelModel):
    """Response model for successful order creation."""

    order_id: Annotated[str, Field(
        description='Generated order identifier',
        examples=['order_1718000000000_k3j9x0a1b']
    )]

    cf_order_id: Annotated[Optional[str], Field(
        default=None,
        description='Order identifier assigned by the gateway'
    )] = None

    payment_session_id: Annotated[Optional[str], Field(
        default=None,
        description='Session id the client passes to the checkout SDK'
    )] = None

    order_amount: Annotated[float, Field(description='Order amount', examples=[100.0])]

    order_currency: Annotated[str, Field(description='ISO currency code', examples=['INR'])]

    order_status: Annotated[Optional[str], Field(
        default=None,
        description='Gateway order status',
        examples=['ACTIVE']
    )] = None


class OrderStatusOutput(CamelModel):
    """Payment summary added next to the relayed gateway order."""

    is_paid: bool

    payment_status: Optional[str] = None
