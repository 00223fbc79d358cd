"""
Environment variable models for type-safe configuration.

This module defines Pydantic models for the environment variables read by the
payment gateway handlers. They are validated once per execution environment
with aws_lambda_env_modeler and handed to the clients that need them.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel, get_environment_variables
from pydantic import Field, ValidationError, field_validator

from pg_proxy.handlers.utils.errors import ConfigurationError
from pg_proxy.models.order import GatewayEnvironment


class GatewayEnvVars(BaseModel):
    """Environment variables required by every payment gateway handler."""

    # Cashfree API credentials
    CASHFREE_CLIENT_ID: Annotated[str, Field(
        min_length=1,
        description='Cashfree client identifier sent as x-client-id'
    )]

    CASHFREE_CLIENT_SECRET: Annotated[str, Field(
        min_length=1,
        description='Cashfree client secret sent as x-client-secret'
    )]

    # Selects the sandbox or production base URL
    CASHFREE_ENVIRONMENT: Annotated[GatewayEnvironment, Field(
        default=GatewayEnvironment.SANDBOX,
        description='Cashfree environment (SANDBOX or PRODUCTION)'
    )] = GatewayEnvironment.SANDBOX

    CASHFREE_TIMEOUT_SECONDS: Annotated[Optional[float], Field(
        default=None,
        gt=0,
        le=900,
        description='Optional timeout for upstream calls; unset means no client-side timeout'
    )] = None

    # Service name for observability
    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='cashfree-pg-proxy',
        description='Service name for AWS Powertools'
    )] = 'cashfree-pg-proxy'

    # Log level for AWS Powertools Logger
    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    @field_validator('CASHFREE_ENVIRONMENT', mode='before')
    @classmethod
    def normalize_environment(cls, v):
        """Accept the environment flag in any letter case; blank means the default."""
        if isinstance(v, str):
            v = v.strip().upper()
            if not v:
                return GatewayEnvironment.SANDBOX
        return v

    @field_validator('CASHFREE_TIMEOUT_SECONDS', mode='before')
    @classmethod
    def blank_timeout_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_production(self) -> bool:
        """Check if the handlers talk to the production gateway."""
        return self.CASHFREE_ENVIRONMENT == GatewayEnvironment.PRODUCTION


class LedgerEnvVars(GatewayEnvVars):
    """Environment variables for handlers that also write the order ledger."""

    SUPABASE_URL: Annotated[str, Field(
        min_length=1,
        description='Supabase project URL'
    )]

    # Service-role key bypasses row-level security on the orders tables
    SUPABASE_SERVICE_ROLE_KEY: Annotated[str, Field(
        min_length=1,
        description='Supabase service-role key'
    )]


def _describe_failures(exc: ValidationError) -> list[dict[str, str]]:
    # Only names and reasons; the offending values may be secrets
    return [
        {"variable": str(error["loc"][-1]), "reason": error["msg"]}
        for error in exc.errors()
    ]


def _load(model: type[GatewayEnvVars]) -> GatewayEnvVars:
    try:
        return get_environment_variables(model=model)
    except ValueError as exc:
        cause = exc.__cause__ if isinstance(exc.__cause__, ValidationError) else exc
        failures = _describe_failures(cause) if isinstance(cause, ValidationError) else []
        missing = [failure["variable"] for failure in failures]
        if any(name.startswith('CASHFREE_CLIENT') for name in missing):
            message = 'Missing Cashfree credentials in environment variables'
        elif missing:
            message = f"Invalid or missing environment variables: {', '.join(missing)}"
        else:
            message = 'Invalid environment configuration'
        raise ConfigurationError(message=message, details=failures or None) from exc


def get_gateway_env_vars() -> GatewayEnvVars:
    """
    Get validated settings for the Cashfree client.

    Returns:
        Validated environment variables model instance

    Raises:
        ConfigurationError: If credentials are missing or a value is invalid
    """
    return _load(GatewayEnvVars)


def get_ledger_env_vars() -> LedgerEnvVars:
    """
    Get validated settings for handlers that write the order ledger.

    Raises:
        ConfigurationError: If credentials or datastore settings are missing
    """
    return _load(LedgerEnvVars)
