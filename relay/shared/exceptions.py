"""
Custom exceptions for the relay services.

Centralized exception hierarchy shared by the publisher and the subscriber.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """Base exception for all relay errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            details: Additional context (dict)
            original_error: Original exception if wrapped
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        """String representation with details."""
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}"
        return base


class ConfigurationError(RelayError):
    """Configuration or settings error."""

    pass


class InvalidMessageError(RelayError):
    """Message payload is empty or cannot be decoded."""

    pass


class BrokerUnavailableError(RelayError):
    """Broker connection or publish failed."""

    def __init__(
        self,
        message: str,
        destination: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, details, original_error)
        self.destination = destination

    def __str__(self) -> str:
        base = super().__str__()
        if self.destination:
            base = f"[{self.destination}] {base}"
        return base


__all__ = [
    "RelayError",
    "ConfigurationError",
    "InvalidMessageError",
    "BrokerUnavailableError",
]
