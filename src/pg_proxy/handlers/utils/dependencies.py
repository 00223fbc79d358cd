"""
Service wiring for the handlers.

Settings are validated and clients are built on first use, then kept for the
life of the execution environment. A configuration failure raises
ConfigurationError before any network call and is not cached, so a fixed
environment is picked up on the next invocation.
"""

from functools import lru_cache

from pg_proxy.dal import LedgerHandler, get_ledger_handler
from pg_proxy.dal.cashfree_client import CashfreeClient
from pg_proxy.handlers.models.env_vars import get_gateway_env_vars, get_ledger_env_vars
from pg_proxy.handlers.utils.observability import logger
from pg_proxy.logic.order_service import OrderService


@lru_cache(maxsize=1)
def get_gateway_client() -> CashfreeClient:
    env = get_gateway_env_vars()
    logger.info('Payment gateway configured', extra={'environment': env.CASHFREE_ENVIRONMENT.value})
    return CashfreeClient.from_env_vars(env)


@lru_cache(maxsize=1)
def get_ledger() -> LedgerHandler:
    env = get_ledger_env_vars()
    return get_ledger_handler(env.SUPABASE_URL, env.SUPABASE_SERVICE_ROLE_KEY)


def get_order_service(with_ledger: bool = False) -> OrderService:
    """
    Build the order service from the cached clients.

    Args:
        with_ledger: Also require and attach the Supabase ledger

    Raises:
        ConfigurationError: If the required settings are missing or invalid
    """
    ledger = get_ledger() if with_ledger else None
    return OrderService(gateway=get_gateway_client(), ledger=ledger)


def reset_dependencies() -> None:
    """Drop cached clients so the next call re-reads the environment."""
    get_gateway_client.cache_clear()
    get_ledger.cache_clear()
