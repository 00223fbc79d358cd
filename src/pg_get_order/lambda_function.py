"""
pg-get-order Lambda Function - Entry point for the pg-get-order API.

Delegates to the order status handler, which also syncs the ledger row.
"""

import os
import sys
from typing import Any, Dict

# Add the service module to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from pg_proxy.handlers.order_status_handler import lambda_handler as order_status_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return order_status_handler(event, context)
