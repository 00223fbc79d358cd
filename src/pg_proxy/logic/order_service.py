"""
Business logic for the payment gateway proxy.

OrderService coordinates the Cashfree client and the order ledger. Calls are
strictly sequential: on creation the ledger row is written before the gateway
is called, on status fetch the gateway is called before the ledger is updated.
"""

from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from pg_proxy.dal import LedgerHandler
from pg_proxy.dal.cashfree_client import CashfreeClient
from pg_proxy.handlers.utils.errors import ConfigurationError, LedgerError
from pg_proxy.handlers.utils.observability import logger, metrics, tracer
from pg_proxy.models.input import CreateOrderRequest
from pg_proxy.models.order import OrderRecord, OrderStatus, generate_customer_id
from pg_proxy.models.output import CreateOrderOutput, OrderStatusOutput

PAID_STATUS = 'PAID'


class OrderService:
    """Gateway operations plus the ledger bookkeeping around them."""

    def __init__(self, gateway: CashfreeClient, ledger: Optional[LedgerHandler] = None):
        """
        Initialize order service.

        Args:
            gateway: Cashfree client
            ledger: Order ledger; required for create_order, optional for status fetches
        """
        self.gateway = gateway
        self.ledger = ledger

    @tracer.capture_method
    def fetch_order(self, order_id: str) -> Any:
        tracer.put_annotation('order_id', order_id)
        return self.gateway.fetch_order(order_id)

    @tracer.capture_method
    def fetch_payment(self, order_id: str, cf_payment_id: str) -> Any:
        tracer.put_annotation('order_id', order_id)
        tracer.put_annotation('cf_payment_id', cf_payment_id)
        return self.gateway.fetch_payment(order_id, cf_payment_id)

    @tracer.capture_method
    def fetch_payments(self, order_id: str) -> Any:
        tracer.put_annotation('order_id', order_id)
        return self.gateway.fetch_payments(order_id)

    @tracer.capture_method
    def create_order(self, request: CreateOrderRequest, origin: Optional[str] = None) -> CreateOrderOutput:
        """
        Create a ledger row, then the gateway order, then record the outcome.

        Args:
            request: Validated creation request
            origin: Origin header of the caller, used for the default return URL

        Returns:
            Identifiers the client needs to open checkout

        Raises:
            ConfigurationError: If no ledger is configured
            LedgerError: If the initial order row cannot be written
            UpstreamError: If the gateway rejects the order
        """
        if self.ledger is None:
            raise ConfigurationError(message='Order ledger is not configured')

        customer = request.customer_details
        customer_id = customer.customer_id or generate_customer_id()
        return_url = request.order_meta.return_url if request.order_meta else None

        record = OrderRecord.create(
            amount=request.order_amount,
            currency=request.order_currency,
            customer_id=customer_id,
            customer_email=customer.customer_email,
            return_url=return_url,
        )
        if record.return_url is None and origin:
            # Cashfree substitutes {order_id} itself
            record.return_url = f'{origin.rstrip("/")}/payment-success?order_id={{order_id}}'

        tracer.put_annotation('order_id', record.id)
        logger.info('Creating order', extra={
            'order_id': record.id,
            'order_amount': record.amount,
            'order_currency': record.currency,
            'item_count': len(request.order_items),
        })

        # Fatal: nothing has been sent upstream yet
        self.ledger.create_order(record)

        if request.order_items:
            try:
                self.ledger.add_order_items(record.id, request.order_items)
            except LedgerError as e:
                metrics.add_metric(name='LedgerWriteFailure', unit=MetricUnit.Count, value=1)
                logger.warning('Order items not recorded; continuing', extra={
                    'order_id': record.id,
                    'error': e.message,
                })

        # Once the row exists, any failure before the gateway answers leaves it failed
        try:
            payload = request.gateway_payload(order_id=record.id, customer_id=customer_id, return_url=record.return_url)
            response = self.gateway.create_order(payload)
        except Exception as e:
            logger.warning('Order creation failed after ledger insert', extra={
                'order_id': record.id,
                'error': str(e),
            })
            self._update_quietly(record.id, {'status': OrderStatus.FAILED.value})
            raise

        response = response if isinstance(response, dict) else {}
        gateway_order_id = response.get('cf_order_id')
        payment_session_id = response.get('payment_session_id')
        self._update_quietly(record.id, {
            'status': OrderStatus.CREATED.value,
            'gateway_order_id': str(gateway_order_id) if gateway_order_id is not None else None,
            'payment_session_id': payment_session_id,
        })

        metrics.add_metric(name='OrderCreated', unit=MetricUnit.Count, value=1)
        logger.info('Order created with gateway', extra={
            'order_id': record.id,
            'cf_order_id': gateway_order_id,
        })

        return CreateOrderOutput(
            order_id=response.get('order_id') or record.id,
            cf_order_id=str(gateway_order_id) if gateway_order_id is not None else None,
            payment_session_id=payment_session_id,
            order_amount=response.get('order_amount') or record.amount,
            order_currency=response.get('order_currency') or record.currency,
            order_status=response.get('order_status'),
        )

    @tracer.capture_method
    def fetch_order_status(self, order_id: str) -> tuple[Any, OrderStatusOutput]:
        """
        Fetch the gateway order and sync its status into the ledger.

        Returns:
            The relayed gateway order and the payment summary
        """
        tracer.put_annotation('order_id', order_id)
        order = self.gateway.fetch_order(order_id)

        gateway_status = order.get('order_status') if isinstance(order, dict) else None
        summary = OrderStatusOutput(is_paid=gateway_status == PAID_STATUS, payment_status=gateway_status)
        if summary.is_paid:
            metrics.add_metric(name='OrderPaid', unit=MetricUnit.Count, value=1)

        logger.info('Order status fetched', extra={
            'order_id': order_id,
            'order_status': gateway_status,
        })

        if self.ledger is not None:
            ledger_status = OrderStatus.from_gateway_status(gateway_status)
            if ledger_status is None:
                logger.warning('Unrecognized gateway order status; ledger left unchanged', extra={
                    'order_id': order_id,
                    'order_status': gateway_status,
                })
            else:
                self._update_quietly(order_id, {'status': ledger_status.value})

        return order, summary

    def _update_quietly(self, order_id: str, fields: Dict[str, Any]) -> None:
        """Update the ledger row; failures are logged and never change the response."""
        try:
            self.ledger.update_order(order_id, fields)
        except LedgerError as e:
            metrics.add_metric(name='LedgerWriteFailure', unit=MetricUnit.Count, value=1)
            logger.warning('Order row not updated', extra={
                'order_id': order_id,
                'fields': sorted(fields),
                'error': e.message,
            })
