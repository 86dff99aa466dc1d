"""
Входной канал: обработчик сообщений subscriber'а.

Каждое сообщение обрабатывается независимо и без состояния: payload пишется
в лог и в stdout. Ошибки обработки логируются и не роняют consumer.
"""

from typing import Any

from faststream.rabbit import RabbitBroker
from rich.console import Console

from relay.config.services import BrokerSettings
from relay.messaging.broker import build_exchange, build_input_queue
from relay.messaging.models import Message
from relay.utility.logging_client import AppLogger


def raw_body_decoder(msg: Any) -> bytes:
    """Отдаёт тело как есть: декодирование UTF-8 делает Message.decode."""
    return msg.body


class MessageHandler:
    """Логирует и печатает каждое полученное сообщение."""

    def __init__(self, logger: AppLogger, console: Console) -> None:
        self._logger = logger
        self._console = console

    def handle(self, message: Message) -> None:
        self._logger.info(f"message received {message.payload}", component="subscriber")
        self._console.out(message.payload, highlight=False)

    def on_message(self, body: bytes) -> None:
        try:
            self.handle(Message.decode(body))
        except Exception as e:
            self._logger.log_exception(
                e,
                component="subscriber",
                context={"body_size": len(body) if body is not None else None},
            )


def register_handler(broker: RabbitBroker, handler: MessageHandler, broker_settings: BrokerSettings):
    """Привязать handler к входной очереди destination'а. Возвращает subscriber FastStream."""
    queue = build_input_queue(broker_settings)
    exchange = build_exchange(broker_settings)

    @broker.subscriber(queue, exchange, decoder=raw_body_decoder)
    async def consume(body: bytes) -> None:
        handler.on_message(body)

    return consume


__all__ = ["MessageHandler", "raw_body_decoder", "register_handler"]
