"""
Supabase implementation of the order ledger.

Rows are written with the service-role key, so row-level security policies
on the orders tables do not apply to these writes.
"""

from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from pg_proxy.dal import BaseLedgerHandler
from pg_proxy.handlers.utils.errors import LedgerError
from pg_proxy.handlers.utils.observability import logger, tracer
from pg_proxy.models.input import OrderItem
from pg_proxy.models.order import OrderRecord


class SupabaseLedgerHandler(BaseLedgerHandler):
    """Supabase (PostgREST) implementation of the ledger."""

    def __init__(self, client: Client, orders_table: str = 'orders', items_table: str = 'order_items') -> None:
        """
        Initialize the Supabase handler.

        Args:
            client: Supabase client created with the service-role key
            orders_table: Name of the orders table
            items_table: Name of the order items table
        """
        super().__init__(orders_table, items_table)
        self.client = client
        logger.debug(f'Supabase ledger initialized for tables: {orders_table}, {items_table}')

    @classmethod
    def from_credentials(cls, supabase_url: str, service_role_key: str) -> 'SupabaseLedgerHandler':
        return cls(create_client(supabase_url, service_role_key))

    @tracer.capture_method
    def create_order(self, record: OrderRecord) -> OrderRecord:
        """
        Insert the initial order row.

        Args:
            record: Order to insert

        Returns:
            The inserted record

        Raises:
            LedgerError: If the insert fails
        """
        try:
            self.client.table(self.orders_table).insert(record.to_row()).execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error('Supabase error creating order', extra={
                'order_id': record.id,
                'error': str(e),
            })
            raise LedgerError(message=f'Failed to create order record: {e}', operation='create_order') from e

        logger.info(f'Order row created: {record.id}')
        tracer.put_annotation('order_id', record.id)
        return record

    @tracer.capture_method
    def add_order_items(self, order_id: str, items: list[OrderItem]) -> None:
        """
        Insert line entries for an order.

        Raises:
            LedgerError: If the insert fails
        """
        if not items:
            return

        rows = [
            {
                'order_id': order_id,
                'product_id': item.product_id,
                'name': item.name,
                'quantity': item.quantity,
                'unit_price': item.unit_price,
            }
            for item in items
        ]
        try:
            self.client.table(self.items_table).insert(rows).execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error('Supabase error creating order items', extra={
                'order_id': order_id,
                'item_count': len(rows),
                'error': str(e),
            })
            raise LedgerError(message=f'Failed to create order items: {e}', operation='add_order_items') from e

        logger.debug(f'Inserted {len(rows)} item rows for order {order_id}')

    @tracer.capture_method
    def update_order(self, order_id: str, fields: dict[str, Any]) -> None:
        """
        Update columns of an existing order row.

        Raises:
            LedgerError: If the update fails
        """
        try:
            self.client.table(self.orders_table).update(fields).eq('id', order_id).execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error('Supabase error updating order', extra={
                'order_id': order_id,
                'fields': sorted(fields),
                'error': str(e),
            })
            raise LedgerError(message=f'Failed to update order record: {e}', operation='update_order') from e

        logger.info(f'Order row updated: {order_id}', extra={'fields': sorted(fields)})
