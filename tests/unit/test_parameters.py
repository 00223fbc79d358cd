"""
Unit tests for identifier resolution.

Identifiers are read from the path after the function name, then the query
string, then (non-GET only) the JSON body.
"""

import pytest
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from pg_proxy.handlers.utils.errors import ParameterError
from pg_proxy.handlers.utils.parameters import (
    BODY,
    CF_PAYMENT_ID,
    ORDER_ID,
    PATH,
    QUERY,
    read_json_body,
    resolve_parameters,
)


@pytest.fixture
def make_event(api_gateway_event):
    def _make(**kwargs):
        return APIGatewayProxyEvent(api_gateway_event(**kwargs))
    return _make


class TestPathChannel:

    def test_segment_after_function_name(self, make_event):
        event = make_event(path="/functions/v1/pg-fetch-order/order_123")

        assert resolve_parameters(event, "pg-fetch-order", [ORDER_ID]) == {ORDER_ID: "order_123"}

    def test_two_positional_segments(self, make_event):
        event = make_event(path="/pg-order-fetch-payment/order_123/5114910423")

        params = resolve_parameters(event, "pg-order-fetch-payment", [ORDER_ID, CF_PAYMENT_ID])

        assert params == {ORDER_ID: "order_123", CF_PAYMENT_ID: "5114910423"}

    def test_segment_is_url_decoded(self, make_event):
        event = make_event(path="/pg-fetch-order/order%20with%20space")

        assert resolve_parameters(event, "pg-fetch-order", [ORDER_ID])[ORDER_ID] == "order with space"

    def test_path_wins_over_query(self, make_event):
        event = make_event(path="/pg-fetch-order/from_path", query={"order_id": "from_query"})

        assert resolve_parameters(event, "pg-fetch-order", [ORDER_ID])[ORDER_ID] == "from_path"


class TestQueryChannel:

    def test_query_parameter(self, make_event):
        event = make_event(path="/pg-fetch-order", query={"order_id": "order_456"})

        assert resolve_parameters(event, "pg-fetch-order", [ORDER_ID]) == {ORDER_ID: "order_456"}

    def test_partial_path_completed_by_query(self, make_event):
        event = make_event(path="/pg-order-fetch-payment/order_123", query={"cf_payment_id": "99"})

        params = resolve_parameters(event, "pg-order-fetch-payment", [ORDER_ID, CF_PAYMENT_ID])

        assert params == {ORDER_ID: "order_123", CF_PAYMENT_ID: "99"}


class TestBodyChannel:

    def test_camel_case_body_field(self, make_event):
        event = make_event(method="POST", path="/pg-get-order", body={"orderId": "order_789"})

        params = resolve_parameters(event, "pg-get-order", [ORDER_ID], channels=(PATH, QUERY, BODY))

        assert params == {ORDER_ID: "order_789"}

    def test_snake_case_body_field(self, make_event):
        event = make_event(method="POST", path="/pg-get-order", body={"order_id": "order_789"})

        params = resolve_parameters(event, "pg-get-order", [ORDER_ID], channels=(PATH, QUERY, BODY))

        assert params == {ORDER_ID: "order_789"}

    def test_numeric_body_field_is_stringified(self, make_event):
        event = make_event(method="POST", path="/pg-get-order", body={"orderId": 42})

        params = resolve_parameters(event, "pg-get-order", [ORDER_ID], channels=(PATH, QUERY, BODY))

        assert params == {ORDER_ID: "42"}

    def test_body_ignored_for_get(self, make_event):
        event = make_event(method="GET", path="/pg-get-order", body={"orderId": "order_789"})

        with pytest.raises(ParameterError):
            resolve_parameters(event, "pg-get-order", [ORDER_ID], channels=(PATH, QUERY, BODY))

    def test_body_not_checked_unless_requested(self, make_event):
        event = make_event(method="POST", path="/pg-fetch-order", body={"orderId": "order_789"})

        with pytest.raises(ParameterError):
            resolve_parameters(event, "pg-fetch-order", [ORDER_ID])

    def test_invalid_json_body(self, make_event):
        event = make_event(method="POST", path="/pg-get-order", body="{not json")

        with pytest.raises(ParameterError) as exc_info:
            resolve_parameters(event, "pg-get-order", [ORDER_ID], channels=(PATH, QUERY, BODY))

        assert exc_info.value.message == "Invalid JSON in request body"
        assert exc_info.value.status_code == 400


class TestMissingIdentifiers:

    def test_single_missing_identifier_message(self, make_event):
        event = make_event(path="/pg-fetch-order")

        with pytest.raises(ParameterError) as exc_info:
            resolve_parameters(event, "pg-fetch-order", [ORDER_ID])

        error = exc_info.value
        assert error.status_code == 400
        assert error.message == (
            "Missing order_id. Provide it as path parameter (/pg-fetch-order/<order_id>) "
            "or query parameter (?order_id=<order_id>)"
        )
        assert error.details == {"missing": ["order_id"], "checked": ["path", "query"]}

    def test_multiple_missing_identifiers(self, make_event):
        event = make_event(path="/pg-order-fetch-payment")

        with pytest.raises(ParameterError) as exc_info:
            resolve_parameters(event, "pg-order-fetch-payment", [ORDER_ID, CF_PAYMENT_ID])

        assert exc_info.value.message.startswith("Missing required parameters: order_id, cf_payment_id.")
        assert exc_info.value.details["missing"] == [ORDER_ID, CF_PAYMENT_ID]

    def test_body_channel_listed_in_message(self, make_event):
        event = make_event(method="POST", path="/pg-get-order", body={})

        with pytest.raises(ParameterError) as exc_info:
            resolve_parameters(event, "pg-get-order", [ORDER_ID], channels=(PATH, QUERY, BODY))

        assert "JSON body field (orderId)" in exc_info.value.message
        assert exc_info.value.details["checked"] == ["path", "query", "body"]

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_values_count_as_missing(self, make_event, blank):
        event = make_event(path="/pg-fetch-order", query={"order_id": blank})

        with pytest.raises(ParameterError):
            resolve_parameters(event, "pg-fetch-order", [ORDER_ID])


class TestReadJsonBody:

    def test_empty_body(self, make_event):
        assert read_json_body(make_event(method="POST")) == {}

    def test_non_object_body(self, make_event):
        assert read_json_body(make_event(method="POST", body=[1, 2])) == {}

    def test_object_body(self, make_event):
        assert read_json_body(make_event(method="POST", body={"a": 1})) == {"a": 1}
