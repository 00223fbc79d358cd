"""
pg-create-order - create a Cashfree order and record it in the ledger.

POST /pg-create-order with a JSON body creates an order. GET on the same
function fetches an existing order by id, as pg-fetch-order does.
"""

from typing import Any, Dict, List

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from pg_proxy.handlers.utils.dependencies import get_order_service
from pg_proxy.handlers.utils.envelope import success_response
from pg_proxy.handlers.utils.errors import RequestValidationError
from pg_proxy.handlers.utils.observability import logger, metrics, tracer
from pg_proxy.handlers.utils.parameters import ORDER_ID, PATH, QUERY, read_json_body, resolve_parameters
from pg_proxy.handlers.utils.rest_api_resolver import CATCH_ALL_PATH, create_resolver
from pg_proxy.models.input import CreateOrderRequest

FUNCTION_NAME = 'pg-create-order'
ALLOWED_METHODS = ['POST', 'GET']

app = create_resolver(ALLOWED_METHODS)


def _field_errors(exc: ValidationError) -> List[Dict[str, str]]:
    return [
        {'field': '.'.join(str(part) for part in error['loc']), 'message': error['msg']}
        for error in exc.errors()
    ]


def _parse_create_request(body: Dict[str, Any]) -> CreateOrderRequest:
    try:
        return CreateOrderRequest.model_validate(body)
    except ValidationError as e:
        logger.warning('Create order request validation failed', extra={'error_count': e.error_count()})
        field_errors = _field_errors(e)
        # Keep insertion order but drop duplicate field paths
        fields = list(dict.fromkeys(error['field'] for error in field_errors))
        raise RequestValidationError(
            message=f"Invalid or missing fields: {', '.join(fields)}",
            field_errors=field_errors,
        ) from e


@app.post(CATCH_ALL_PATH)
@tracer.capture_method
def create_order() -> Response:
    """
    Create an order.

    Request body (camelCase or snake_case):
        orderAmount, orderCurrency, customerDetails{customerName, customerEmail,
        customerPhone, customerId?}, orderMeta?, orderItems?

    Returns:
        Envelope with orderId, cfOrderId, paymentSessionId, orderAmount,
        orderCurrency and orderStatus
    """
    request = _parse_create_request(read_json_body(app.current_event))
    origin = app.current_event.headers.get('origin')

    output = get_order_service(with_ledger=True).create_order(request, origin=origin)

    return success_response(output.model_dump(by_alias=True), 'Order created successfully')


@app.get(CATCH_ALL_PATH)
@tracer.capture_method
def fetch_order() -> Response:
    params = resolve_parameters(app.current_event, FUNCTION_NAME, [ORDER_ID], channels=(PATH, QUERY))
    order = get_order_service().fetch_order(params[ORDER_ID])
    return success_response(order, 'Order fetched successfully')


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    metrics.add_metric(name='RequestCount', unit=MetricUnit.Count, value=1)
    return app.resolve(event, context)
