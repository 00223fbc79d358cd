"""
pg-order-fetch-payment - fetch a single payment attempt of an order.

GET /pg-order-fetch-payment/<order_id>/<cf_payment_id>
GET /pg-order-fetch-payment?order_id=<order_id>&cf_payment_id=<cf_payment_id>
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from pg_proxy.handlers.utils.dependencies import get_order_service
from pg_proxy.handlers.utils.envelope import success_response
from pg_proxy.handlers.utils.observability import logger, metrics, tracer
from pg_proxy.handlers.utils.parameters import CF_PAYMENT_ID, ORDER_ID, PATH, QUERY, resolve_parameters
from pg_proxy.handlers.utils.rest_api_resolver import CATCH_ALL_PATH, create_resolver

FUNCTION_NAME = 'pg-order-fetch-payment'
ALLOWED_METHODS = ['GET']

app = create_resolver(ALLOWED_METHODS)


@app.get(CATCH_ALL_PATH)
@tracer.capture_method
def fetch_payment() -> Response:
    """Relay one payment record of an order."""
    params = resolve_parameters(
        app.current_event,
        FUNCTION_NAME,
        [ORDER_ID, CF_PAYMENT_ID],
        channels=(PATH, QUERY),
    )
    logger.info('Fetch payment request received', extra=params)

    payment = get_order_service().fetch_payment(params[ORDER_ID], params[CF_PAYMENT_ID])

    return success_response(payment, 'Payment details fetched successfully')


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)
    return app.resolve(event, context)
