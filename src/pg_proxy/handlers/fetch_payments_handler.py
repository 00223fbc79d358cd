"""
pg-order-fetch-payments - list every payment attempt of an order.

Accepts the order id as a path segment, a query parameter, or (POST) a JSON
body field `orderId` / `order_id`.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from pg_proxy.handlers.utils.dependencies import get_order_service
from pg_proxy.handlers.utils.envelope import success_response
from pg_proxy.handlers.utils.observability import logger, metrics, tracer
from pg_proxy.handlers.utils.parameters import BODY, ORDER_ID, PATH, QUERY, resolve_parameters
from pg_proxy.handlers.utils.rest_api_resolver import CATCH_ALL_PATH, create_resolver

FUNCTION_NAME = 'pg-order-fetch-payments'
ALLOWED_METHODS = ['GET', 'POST']

app = create_resolver(ALLOWED_METHODS)


@app.route(CATCH_ALL_PATH, method=ALLOWED_METHODS)
@tracer.capture_method
def fetch_payments() -> Response:
    """Relay the payment list of an order."""
    params = resolve_parameters(app.current_event, FUNCTION_NAME, [ORDER_ID], channels=(PATH, QUERY, BODY))
    logger.info('Fetch payments request received', extra={'order_id': params[ORDER_ID]})

    payments = get_order_service().fetch_payments(params[ORDER_ID])

    return success_response(payments, 'Payments fetched successfully')


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)
    return app.resolve(event, context)
