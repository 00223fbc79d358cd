"""
Identifier resolution for the gateway handlers.

An identifier may arrive as a path segment after the function's own name
(`/functions/v1/pg-fetch-order/order_123`), as a query-string parameter
(`?order_id=order_123`), or, for non-GET requests, as a JSON body field in
snake_case or camelCase. Per identifier the first non-empty source wins.
"""

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import unquote

from aws_lambda_powertools.utilities.data_classes.common import BaseProxyEvent
from pydantic.alias_generators import to_camel

from pg_proxy.handlers.utils.errors import ParameterError
from pg_proxy.handlers.utils.observability import logger

ORDER_ID = 'order_id'
CF_PAYMENT_ID = 'cf_payment_id'

PATH = 'path'
QUERY = 'query'
BODY = 'body'

DEFAULT_CHANNELS = (PATH, QUERY)


def read_json_body(event: BaseProxyEvent) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Returns:
        The decoded object, or an empty dict when there is no body or it is not an object

    Raises:
        ParameterError: If the body is not valid JSON
    """
    try:
        body = event.json_body
    except ValueError as e:
        logger.warning('Request body is not valid JSON', extra={'error': str(e)})
        raise ParameterError(message='Invalid JSON in request body', details=str(e)) from e
    return body if isinstance(body, dict) else {}


def _path_values(path: str, function_name: str, names: Sequence[str]) -> Dict[str, str]:
    parts = [unquote(part) for part in path.split('/') if part]
    if function_name not in parts:
        return {}
    following = parts[parts.index(function_name) + 1:]
    return dict(zip(names, following))


def _body_value(body: Dict[str, Any], name: str) -> Optional[str]:
    for key in (name, to_camel(name)):
        value = body.get(key)
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            text = str(value).strip()
            if text:
                return text
    return None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _missing_message(function_name: str, names: Sequence[str], missing: List[str], channels: Sequence[str]) -> str:
    hints = []
    if PATH in channels:
        segments = '/'.join(f'<{name}>' for name in names)
        hints.append(f'path parameter (/{function_name}/{segments})')
    if QUERY in channels:
        query = '&'.join(f'{name}=<{name}>' for name in missing)
        hints.append(f'query parameter (?{query})')
    if BODY in channels:
        fields = ', '.join(to_camel(name) for name in missing)
        hints.append(f'JSON body field ({fields})')

    if len(hints) > 1:
        where = f"{', '.join(hints[:-1])} or {hints[-1]}"
    else:
        where = hints[0] if hints else 'the request'

    if len(missing) == 1:
        return f'Missing {missing[0]}. Provide it as {where}'
    return f"Missing required parameters: {', '.join(missing)}. Provide them as {where}"


def resolve_parameters(
    event: BaseProxyEvent,
    function_name: str,
    names: Sequence[str],
    channels: Sequence[str] = DEFAULT_CHANNELS,
) -> Dict[str, str]:
    """
    Resolve required identifiers from the request.

    Args:
        event: API Gateway proxy event
        function_name: Route name the path segments follow, e.g. "pg-fetch-order"
        names: Identifier names in path order, e.g. ["order_id", "cf_payment_id"]
        channels: Input channels to check, in priority order

    Returns:
        Mapping of every requested name to a non-empty string

    Raises:
        ParameterError: If any identifier resolves to empty, or the body is not valid JSON
    """
    from_path = _path_values(event.path or '', function_name, names) if PATH in channels else {}

    body: Dict[str, Any] = {}
    if BODY in channels and event.http_method.upper() != 'GET':
        body = read_json_body(event)

    resolved: Dict[str, str] = {}
    for name in names:
        value = _clean(from_path.get(name))
        if value is None and QUERY in channels:
            value = _clean(event.get_query_string_value(name))
        if value is None and BODY in channels:
            value = _body_value(body, name)
        if value is not None:
            resolved[name] = value

    missing = [name for name in names if name not in resolved]
    if missing:
        raise ParameterError(
            message=_missing_message(function_name, names, missing, channels),
            details={'missing': missing, 'checked': list(channels)},
        )

    logger.debug('Resolved request identifiers', extra=resolved)
    return resolved
