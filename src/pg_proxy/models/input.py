"""
Input models for request validation using Pydantic.

Request bodies may use camelCase (as sent by the web client) or snake_case
(as used by the Cashfree API); both spellings populate the same fields.
"""

import re
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerDetails(CamelModel):
    """Customer block forwarded to the gateway."""

    customer_name: Annotated[str, Field(
        min_length=1,
        max_length=100,
        description='Customer name',
        examples=['Asha Rao']
    )]

    customer_email: Annotated[str, Field(
        description='Customer email address',
        examples=['asha@example.com']
    )]

    customer_phone: Annotated[str, Field(
        pattern=r'^\+?[0-9]{8,15}$',
        description='Customer phone number',
        examples=['9999999999']
    )]

    customer_id: Annotated[Optional[str], Field(
        default=None,
        pattern=r'^[A-Za-z0-9_-]{1,50}$',
        description='Gateway customer id; generated when omitted'
    )] = None

    @field_validator('customer_name', 'customer_phone', mode='before')
    @classmethod
    def strip_whitespace(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator('customer_email')
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email format."""
        if not _EMAIL_PATTERN.match(v):
            raise ValueError('Invalid email format')
        return v.lower()


class OrderMeta(CamelModel):
    """Optional checkout settings."""

    return_url: Optional[str] = None
    notify_url: Optional[str] = None
    payment_methods: Optional[str] = None


class OrderItem(CamelModel):
    """Line entry stored in the order_items table."""

    name: Annotated[str, Field(min_length=1, max_length=200)]

    quantity: Annotated[int, Field(ge=1, le=1000)] = 1

    unit_price: Annotated[float, Field(ge=0, allow_inf_nan=False)] = 0.0

    product_id: Optional[str] = None


class CreateOrderRequest(CamelModel):
    """Request model for creating a new gateway order."""

    order_amount: Annotated[float, Field(
        gt=0,
        allow_inf_nan=False,
        description='Amount to collect; numeric strings are accepted',
        examples=[100, '249.50']
    )]

    order_currency: Annotated[str, Field(
        default='INR',
        pattern=r'^[A-Z]{3}$',
        description='ISO currency code'
    )] = 'INR'

    customer_details: Annotated[CustomerDetails, Field(
        description='Customer block; name, email and phone are required'
    )]

    order_meta: Optional[OrderMeta] = None

    order_items: Annotated[List[OrderItem], Field(
        default_factory=list,
        max_length=100,
        description='Optional line entries recorded in the ledger'
    )]

    @field_validator('order_currency', mode='before')
    @classmethod
    def upper_currency(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    def gateway_payload(self, order_id: str, customer_id: str, return_url: Optional[str]) -> Dict[str, Any]:
        """Build the Cashfree create-order body, omitting unset optional fields."""
        customer = self.customer_details
        payload: Dict[str, Any] = {
            'order_id': order_id,
            'order_amount': self.order_amount,
            'order_currency': self.order_currency,
            'customer_details': {
                'customer_id': customer_id,
                'customer_email': customer.customer_email,
                'customer_phone': customer.customer_phone,
                'customer_name': customer.customer_name,
            },
        }
        meta = {
            'return_url': return_url,
            'notify_url': self.order_meta.notify_url if self.order_meta else None,
            'payment_methods': self.order_meta.payment_methods if self.order_meta else None,
        }
        meta = {key: value for key, value in meta.items() if value}
        if meta:
            payload['order_meta'] = meta
        return payload
