"""
Shared Powertools instances for the payment gateway handlers.

Every deployed function imports the same logger, tracer and metrics objects,
so order ids and error classifications are reported consistently.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# Request, error and order lifecycle counters
METRICS_NAMESPACE = 'CashfreePgProxy'

# Service name from POWERTOOLS_SERVICE_NAME, level from LOG_LEVEL.
# Credentials are never passed as log extras.
logger: Logger = Logger()

# No-op when POWERTOOLS_TRACE_DISABLED is "true" or outside Lambda
tracer: Tracer = Tracer()

metrics = Metrics(namespace=METRICS_NAMESPACE)
