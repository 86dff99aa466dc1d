"""stream-relay: HTTP publisher and RabbitMQ subscriber."""

__version__ = "0.1.0"
