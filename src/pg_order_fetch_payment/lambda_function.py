"""
pg-order-fetch-payment Lambda Function - Entry point for the pg-order-fetch-payment API.

Delegates to the single payment fetch handler.
"""

import os
import sys
from typing import Any, Dict

# Add the service module to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from pg_proxy.handlers.fetch_payment_handler import lambda_handler as fetch_payment_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return fetch_payment_handler(event, context)
