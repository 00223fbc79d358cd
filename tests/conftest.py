"""
Pytest configuration and shared fixtures for the payment gateway proxy.

This module provides common test fixtures and configuration used across
unit, integration, and end-to-end tests. The Cashfree API is replaced by an
httpx.MockTransport and the Supabase ledger by an in-memory double.
"""

import json
import os
from typing import Any, Dict, List, Optional
from unittest.mock import Mock, patch

import httpx
import pytest

TEST_ENVIRONMENT = {
    "AWS_DEFAULT_REGION": "ap-south-1",
    "CASHFREE_CLIENT_ID": "test-client-id",
    "CASHFREE_CLIENT_SECRET": "test-client-secret",
    "CASHFREE_ENVIRONMENT": "SANDBOX",
    "SUPABASE_URL": "https://test-project.supabase.co",
    "SUPABASE_SERVICE_ROLE_KEY": "test-service-role-key",
    "POWERTOOLS_SERVICE_NAME": "test-cashfree-pg-proxy",
    "POWERTOOLS_METRICS_NAMESPACE": "TestCashfreePgProxy",
    "LOG_LEVEL": "DEBUG",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LAMBDA_ENV_MODELER_DISABLE_CACHE": "true",
}

# Set before the service modules are imported at collection time
os.environ.update(TEST_ENVIRONMENT)

from pg_proxy.dal import BaseLedgerHandler  # noqa: E402
from pg_proxy.dal.cashfree_client import CashfreeClient  # noqa: E402
from pg_proxy.handlers.utils.dependencies import reset_dependencies  # noqa: E402
from pg_proxy.handlers.utils.errors import LedgerError  # noqa: E402
from pg_proxy.models.order import GatewayEnvironment, OrderRecord  # noqa: E402

SANDBOX_PREFIX = "/pg"


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Restore the test environment variables for every test."""
    for name, value in TEST_ENVIRONMENT.items():
        monkeypatch.setenv(name, value)
    yield


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop cached clients between tests."""
    reset_dependencies()
    yield
    reset_dependencies()


class FakeGateway:
    """Stubbed Cashfree API recording every request it receives."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[tuple, httpx.Response] = {}

    def respond(self, method: str, path: str, status_code: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        """Register the response for METHOD /pg<path>."""
        if text is not None:
            response = httpx.Response(status_code, text=text)
        else:
            response = httpx.Response(status_code, json=json_body)
        self.routes[(method, f"{SANDBOX_PREFIX}{path}")] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        stub = self.routes.get((request.method, request.url.path))
        if stub is None:
            return httpx.Response(404, json={"message": f"no stub for {request.method} {request.url.path}"})
        return httpx.Response(stub.status_code, content=stub.content, headers=stub.headers)

    def sent_json(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


class FakeLedger(BaseLedgerHandler):
    """In-memory order ledger."""

    def __init__(self) -> None:
        super().__init__()
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.items: Dict[str, List[Dict[str, Any]]] = {}
        self.updates: List[tuple] = []
        self.fail_on: set = set()

    def create_order(self, record: OrderRecord) -> OrderRecord:
        if "create_order" in self.fail_on:
            raise LedgerError(message="Failed to create order record: boom", operation="create_order")
        self.rows[record.id] = record.to_row()
        return record

    def add_order_items(self, order_id, items) -> None:
        if "add_order_items" in self.fail_on:
            raise LedgerError(message="Failed to create order items: boom", operation="add_order_items")
        self.items[order_id] = [item.model_dump() for item in items]

    def update_order(self, order_id, fields) -> None:
        self.updates.append((order_id, dict(fields)))
        if "update_order" in self.fail_on:
            raise LedgerError(message="Failed to update order record: boom", operation="update_order")
        self.rows.setdefault(order_id, {"id": order_id}).update(fields)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def cashfree_client(fake_gateway) -> CashfreeClient:
    """Cashfree client whose HTTP traffic goes to the stubbed gateway."""
    client = CashfreeClient(
        client_id="test-client-id",
        client_secret="test-client-secret",
        environment=GatewayEnvironment.SANDBOX,
        http_client=httpx.Client(transport=httpx.MockTransport(fake_gateway)),
    )
    yield client
    client.close()


@pytest.fixture
def fake_ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def wired_services(cashfree_client, fake_ledger):
    """Point the handler dependencies at the stubbed gateway and in-memory ledger."""
    with patch("pg_proxy.handlers.utils.dependencies.get_gateway_client", return_value=cashfree_client), \
            patch("pg_proxy.handlers.utils.dependencies.get_ledger", return_value=fake_ledger):
        yield cashfree_client, fake_ledger


# Sample data fixtures
@pytest.fixture
def sample_gateway_order() -> Dict[str, Any]:
    """Order as returned by GET /pg/orders/{order_id}."""
    return {
        "cf_order_id": "2149460581",
        "order_id": "order_1718000000000_abc123xyz",
        "entity": "order",
        "order_currency": "INR",
        "order_amount": 100.0,
        "order_status": "ACTIVE",
        "payment_session_id": "session_test_123",
        "customer_details": {
            "customer_id": "customer_1718000000000_abc123",
            "customer_name": "Asha Rao",
            "customer_email": "asha@example.com",
            "customer_phone": "9999999999",
        },
    }


@pytest.fixture
def sample_create_body() -> Dict[str, Any]:
    """Create order request body as sent by the web client."""
    return {
        "orderAmount": 100,
        "orderCurrency": "INR",
        "customerDetails": {
            "customerName": "Asha Rao",
            "customerEmail": "Asha@Example.com",
            "customerPhone": "9999999999",
        },
        "orderItems": [
            {"name": "Notebook", "quantity": 2, "unitPrice": 50, "productId": "prod_1"},
        ],
    }


@pytest.fixture
def api_gateway_event():
    """Factory for API Gateway REST proxy events."""

    def _event(
        method: str = "GET",
        path: str = "/",
        query: Optional[Dict[str, str]] = None,
        body: Any = None,
        origin: Optional[str] = "https://shop.example.com",
    ) -> Dict[str, Any]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": "test-agent/1.0",
        }
        if origin:
            headers["origin"] = origin
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        return {
            "resource": "/{proxy+}",
            "httpMethod": method,
            "path": path,
            "headers": headers,
            "multiValueHeaders": {key: [value] for key, value in headers.items()},
            "body": body,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "httpMethod": method,
                "path": path,
                "protocol": "HTTP/1.1",
                "requestTime": "2024-01-01T12:00:00.000Z",
                "requestTimeEpoch": 1704110400000,
                "identity": {
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
            },
            "pathParameters": None,
            "queryStringParameters": query,
            "multiValueQueryStringParameters": {key: [value] for key, value in query.items()} if query else None,
            "stageVariables": None,
            "isBase64Encoded": False,
        }

    return _event


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-lambda-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:ap-south-1:123456789012:function:test-lambda-function"
    context.memory_limit_in_mb = 512
    context.get_remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-lambda-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)
