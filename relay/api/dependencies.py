"""
FastAPI dependencies.

Publisher and logger live on `app.state` (set by `create_app`), so handlers
receive them explicitly and tests can swap them per app instance.
"""

from fastapi import Request

from relay.messaging.publisher import RabbitPublisher
from relay.utility.logging_client import AppLogger


def get_publisher(request: Request) -> RabbitPublisher:
    return request.app.state.publisher


def get_logger(request: Request) -> AppLogger:
    return request.app.state.logger
