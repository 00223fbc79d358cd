"""
Cashfree Payment Gateway REST client.

A single, version-pinned request builder for the `/pg/orders` family of
endpoints. One blocking call per operation: no retries, no backoff, and no
client-side timeout unless one is configured.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from pg_proxy.handlers.models.env_vars import GatewayEnvVars
from pg_proxy.handlers.utils.errors import ConfigurationError, UpstreamError
from pg_proxy.handlers.utils.observability import logger, tracer
from pg_proxy.models.order import GatewayEnvironment

API_VERSION = '2023-08-01'

BASE_URLS = {
    GatewayEnvironment.SANDBOX: 'https://sandbox.cashfree.com/pg',
    GatewayEnvironment.PRODUCTION: 'https://api.cashfree.com/pg',
}

INVALID_JSON_MESSAGE = 'Invalid JSON response from payment gateway'


def _upstream_message(response: httpx.Response, body: Any) -> str:
    """Pick the most specific error text the gateway returned."""
    if isinstance(body, dict):
        if body.get('message'):
            return str(body['message'])
        if body.get('error_description'):
            return str(body['error_description'])
        errors = body.get('errors')
        if isinstance(errors, list) and errors and isinstance(errors[0], dict) and errors[0].get('message'):
            return str(errors[0]['message'])
    return f'HTTP {response.status_code}: {response.reason_phrase}'


class CashfreeClient:
    """Client for the Cashfree PG orders API."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        environment: GatewayEnvironment = GatewayEnvironment.SANDBOX,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Initialize the Cashfree client.

        Args:
            client_id: Value for the x-client-id header
            client_secret: Value for the x-client-secret header
            environment: Selects the sandbox or production base URL
            timeout: Optional request timeout in seconds
            http_client: Pre-built httpx client, mainly for tests

        Raises:
            ConfigurationError: If either credential is empty
        """
        if not client_id or not client_secret:
            raise ConfigurationError(
                message='Missing Cashfree credentials in environment variables',
                details={'hasClientId': bool(client_id), 'hasClientSecret': bool(client_secret)},
            )
        self.environment = GatewayEnvironment(environment)
        self.base_url = BASE_URLS[self.environment]
        self._headers = {
            'x-client-id': client_id,
            'x-client-secret': client_secret,
            'x-api-version': API_VERSION,
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }
        self._http = http_client or httpx.Client(timeout=timeout)
        logger.debug('Cashfree client initialized', extra={
            'environment': self.environment.value,
            'base_url': self.base_url,
        })

    @classmethod
    def from_env_vars(cls, env: GatewayEnvVars, http_client: Optional[httpx.Client] = None) -> 'CashfreeClient':
        return cls(
            client_id=env.CASHFREE_CLIENT_ID,
            client_secret=env.CASHFREE_CLIENT_SECRET,
            environment=env.CASHFREE_ENVIRONMENT,
            timeout=env.CASHFREE_TIMEOUT_SECONDS,
            http_client=http_client,
        )

    @tracer.capture_method
    def create_order(self, payload: Dict[str, Any]) -> Any:
        """Create an order (POST /orders)."""
        return self._request('POST', '/orders', json=payload)

    @tracer.capture_method
    def fetch_order(self, order_id: str) -> Any:
        """Fetch an order (GET /orders/{order_id})."""
        return self._request('GET', f'/orders/{quote(order_id, safe="")}')

    @tracer.capture_method
    def fetch_payment(self, order_id: str, cf_payment_id: str) -> Any:
        """Fetch one payment of an order (GET /orders/{order_id}/payments/{cf_payment_id})."""
        return self._request(
            'GET',
            f'/orders/{quote(order_id, safe="")}/payments/{quote(cf_payment_id, safe="")}',
        )

    @tracer.capture_method
    def fetch_payments(self, order_id: str) -> Any:
        """Fetch all payments of an order (GET /orders/{order_id}/payments)."""
        return self._request('GET', f'/orders/{quote(order_id, safe="")}/payments')

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        url = f'{self.base_url}{path}'
        try:
            response = self._http.request(method, url, headers=self._headers, json=json)
        except httpx.HTTPError as exc:
            logger.error('Payment gateway request failed', extra={
                'method': method,
                'path': path,
                'error': str(exc),
            })
            raise UpstreamError(message=f'Payment gateway request failed: {exc}') from exc

        logger.info('Payment gateway responded', extra={
            'method': method,
            'path': path,
            'upstream_status': response.status_code,
        })

        try:
            body = response.json()
        except ValueError:
            logger.error('Payment gateway returned a non-JSON body', extra={
                'upstream_status': response.status_code,
                'body_preview': response.text[:200],
            })
            raise UpstreamError(message=INVALID_JSON_MESSAGE, upstream_status=response.status_code)

        if not response.is_success:
            message = _upstream_message(response, body)
            logger.error('Payment gateway returned an error', extra={
                'upstream_status': response.status_code,
                'upstream_message': message,
                'upstream_code': body.get('code') if isinstance(body, dict) else None,
            })
            raise UpstreamError(message=message, upstream_status=response.status_code)

        return body

    def close(self) -> None:
        self._http.close()
