"""Общие компоненты: исключения."""

from relay.shared.exceptions import (
    BrokerUnavailableError,
    ConfigurationError,
    InvalidMessageError,
    RelayError,
)

__all__ = [
    "RelayError",
    "ConfigurationError",
    "InvalidMessageError",
    "BrokerUnavailableError",
]
