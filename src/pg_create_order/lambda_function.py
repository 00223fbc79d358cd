"""
pg-create-order Lambda Function - Entry point for the pg-create-order API.

This module serves as the Lambda function entry point that delegates to the
create order handler: POST creates a gateway order and a ledger row, GET
fetches an existing order.
"""

import os
import sys
from typing import Any, Dict

# Add the service module to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from pg_proxy.handlers.create_order_handler import lambda_handler as create_order_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for order creation.

    Args:
        event: Lambda event payload (API Gateway REST event)
        context: Lambda context object

    Returns:
        API Gateway response dictionary
    """
    return create_order_handler(event, context)
