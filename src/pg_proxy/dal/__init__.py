"""
Data Access Layer (DAL) for the payment gateway proxy.

Two external collaborators live here: the Cashfree REST client and the order
ledger kept in Supabase. This module defines the ledger interface and the
factory that builds the concrete handler from validated settings.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from pg_proxy.models.input import OrderItem
from pg_proxy.models.order import OrderRecord


@runtime_checkable
class LedgerHandler(Protocol):
    """Protocol defining the order ledger interface."""

    def create_order(self, record: OrderRecord) -> OrderRecord:
        """Insert the initial order row."""
        ...

    def add_order_items(self, order_id: str, items: list[OrderItem]) -> None:
        """Insert line entries for an order."""
        ...

    def update_order(self, order_id: str, fields: dict[str, Any]) -> None:
        """Update columns of an existing order row."""
        ...


class BaseLedgerHandler(ABC):
    """Abstract base class for order ledger implementations."""

    def __init__(self, orders_table: str = 'orders', items_table: str = 'order_items') -> None:
        """
        Initialize the ledger handler.

        Args:
            orders_table: Name of the orders table
            items_table: Name of the order items table
        """
        self.orders_table = orders_table
        self.items_table = items_table

    @abstractmethod
    def create_order(self, record: OrderRecord) -> OrderRecord:
        """Insert the initial order row."""
        pass

    @abstractmethod
    def add_order_items(self, order_id: str, items: list[OrderItem]) -> None:
        """Insert line entries for an order."""
        pass

    @abstractmethod
    def update_order(self, order_id: str, fields: dict[str, Any]) -> None:
        """Update columns of an existing order row."""
        pass


def get_ledger_handler(supabase_url: str, service_role_key: str) -> LedgerHandler:
    """
    Factory function to get the ledger handler.

    Args:
        supabase_url: Supabase project URL
        service_role_key: Service-role key (bypasses row-level security)

    Returns:
        Ledger handler instance
    """
    # Import here to avoid circular imports
    from pg_proxy.dal.supabase_handler import SupabaseLedgerHandler

    return SupabaseLedgerHandler.from_credentials(supabase_url, service_role_key)


__all__ = [
    'LedgerHandler',
    'BaseLedgerHandler',
    'get_ledger_handler',
]
