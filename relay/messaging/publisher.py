"""
Выходной канал: публикация сообщений в RabbitMQ через FastStream broker.

Публикация fire-and-forget: подтверждение от subscriber'ов не ожидается.
Любой сбой подключения или публикации превращается в BrokerUnavailableError,
чтобы HTTP слой мог ответить 503, а не "успехом".
"""

from __future__ import annotations

import asyncio
from typing import Optional

from faststream.rabbit import RabbitBroker

from relay.config.services import BrokerSettings
from relay.messaging.broker import build_exchange
from relay.messaging.models import WIRE_CONTENT_TYPE, WIRE_ENCODING, Message
from relay.shared.exceptions import BrokerUnavailableError
from relay.utility.logging_client import AppLogger


class RabbitPublisher:
    """
    Лёгкий publisher с ленивым подключением.

    Примечание:
    - Подключение создаётся при первом send.
    - В рамках FastAPI процесса держим один broker, чтобы не создавать
      TCP-соединения для каждого сообщения.
    - После ошибки publisher помечается отключённым: следующий send
      переподключается.
    """

    def __init__(
        self,
        broker_settings: BrokerSettings,
        logger: AppLogger,
        broker: Optional[RabbitBroker] = None,
    ) -> None:
        self._settings = broker_settings
        self._logger = logger
        self._broker = broker if broker is not None else RabbitBroker(broker_settings.amqp_url)
        self._exchange = build_exchange(broker_settings)
        self._lock = asyncio.Lock()
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def destination(self) -> str:
        return self._settings.destination

    async def _ensure_connected(self) -> None:
        if self._connected:
            return
        async with self._lock:
            if self._connected:
                return
            try:
                await asyncio.wait_for(
                    self._broker.connect(), timeout=self._settings.connect_timeout
                )
            except Exception as e:
                self._logger.error(
                    f"Не удалось подключиться к RabbitMQ: {type(e).__name__}: {e}",
                    component="publisher",
                )
                raise BrokerUnavailableError(
                    "Message broker is unreachable",
                    destination=self.destination,
                    original_error=e,
                ) from e
            self._connected = True
            self._logger.info(
                f"Подключено к RabbitMQ, destination={self.destination}",
                component="publisher",
            )

    async def send(self, message: Message) -> None:
        await self._ensure_connected()
        with self._logger.timed("publish", component="publisher") as op:
            op.add_context(
                destination=self.destination,
                routing_key=self._settings.publish_routing_key,
                size=len(message.payload),
            )
            try:
                await asyncio.wait_for(
                    self._broker.publish(
                        message.encode(),
                        exchange=self._exchange,
                        routing_key=self._settings.publish_routing_key,
                        content_type=WIRE_CONTENT_TYPE,
                        content_encoding=WIRE_ENCODING,
                    ),
                    timeout=self._settings.connect_timeout,
                )
            except Exception as e:
                self._connected = False
                raise BrokerUnavailableError(
                    "Failed to publish message",
                    destination=self.destination,
                    original_error=e,
                ) from e

    async def close(self) -> None:
        # stop() runs even when disconnected: a failed publish or a timed out
        # connect may leave a half-open robust connection behind.
        async with self._lock:
            was_connected = self._connected
            self._connected = False
            await self._broker.stop()
            if was_connected:
                self._logger.info("Соединение с RabbitMQ закрыто", component="publisher")


__all__ = ["RabbitPublisher"]
