"""
FastStream worker: процесс subscriber'а (RabbitMQ listener).

Запуск (пример):
    python -m relay.messaging.worker
    relay-subscriber
"""

from __future__ import annotations

import asyncio
from typing import Optional

from faststream import FastStream
from rich.console import Console

from relay.config.settings import Settings
from relay.config.settings import settings as default_settings
from relay.messaging.broker import get_rabbit_broker
from relay.messaging.subscriber import MessageHandler, register_handler
from relay.utility.logging_client import AppLogger, logger


def create_worker(
    settings: Optional[Settings] = None,
    console: Optional[Console] = None,
    app_logger: Optional[AppLogger] = None,
) -> FastStream:
    settings = settings or default_settings
    app_logger = app_logger or logger
    broker_settings = settings.broker

    broker = get_rabbit_broker(broker_settings)
    handler = MessageHandler(logger=app_logger, console=console or Console(highlight=False))
    register_handler(broker, handler, broker_settings)

    app = FastStream(broker)

    @app.after_startup
    async def _announce() -> None:
        app_logger.info(
            f"Subscriber слушает destination={broker_settings.destination}",
            component="subscriber",
        )

    return app


def main() -> None:
    logger.set_level(default_settings.app.log_level)
    app = create_worker()
    try:
        # Важно: это long-lived процесс (воркер).
        asyncio.run(app.run())
    except KeyboardInterrupt:
        logger.info("Subscriber остановлен вручную", component="subscriber")


if __name__ == "__main__":
    main()
