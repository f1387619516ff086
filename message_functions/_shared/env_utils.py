"""
Environment Variable Utilities.

Reads Function App settings for the weather messaging functions.
Settings are read per invocation so that a missing value turns into an
error response instead of a failed cold start.

Source: message_functions/_shared/env_utils.py
Editable: Yes - This is shared runtime code packaged with the Function App
"""
import os
from dataclasses import dataclass


SERVICE_BUS_CONNECTION_SETTING = "ServiceBusConnectionString"
QUEUE_NAME_SETTING = "QueueName"


@dataclass(frozen=True)
class ServiceBusSettings:
    """Connection details for the weather updates queue."""
    connection_string: str
    queue_name: str


def require_env(name: str) -> str:
    """
    Get required environment variable or raise.

    Args:
        name: The environment variable name

    Returns:
        The stripped environment variable value

    Raises:
        EnvironmentError: If the variable is missing or empty

    Example:
        from _shared.env_utils import require_env

        queue_name = require_env("QueueName")
    """
    value = os.environ.get(name, "").strip()
    if not value:
        raise EnvironmentError(
            f"CRITICAL: Required environment variable '{name}' is missing or empty"
        )
    return value


def get_service_bus_settings() -> ServiceBusSettings:
    """
    Load the Service Bus connection string and queue name.

    The connection string is checked first, so a Function App with
    neither setting reports the connection string as missing.

    Raises:
        EnvironmentError: If either setting is missing or empty
    """
    connection_string = require_env(SERVICE_BUS_CONNECTION_SETTING)
    queue_name = require_env(QUEUE_NAME_SETTING)
    return ServiceBusSettings(connection_string=connection_string, queue_name=queue_name)


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean app setting ("true"/"1"/"yes" are truthy)."""
    value = os.environ.get(name, "").strip().lower()
    if not value:
        return default
    return value in ("true", "1", "yes")
