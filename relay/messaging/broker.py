"""
Привязка каналов к RabbitMQ (FastStream).

Вместо неявного связывания каналов здесь явно описаны:
- broker (подключение по `BrokerSettings.amqp_url`);
- topic exchange с именем destination — общий для выходного и входного канала;
- входная очередь subscriber'а.

Важно: создание `RabbitBroker(...)` не подключается к RabbitMQ сразу.
"""

from __future__ import annotations

import uuid

from faststream.rabbit import ExchangeType, RabbitBroker, RabbitExchange, RabbitQueue

from relay.config.services import BrokerSettings


def get_rabbit_broker(broker_settings: BrokerSettings) -> RabbitBroker:
    return RabbitBroker(broker_settings.amqp_url)


def build_exchange(broker_settings: BrokerSettings) -> RabbitExchange:
    return RabbitExchange(broker_settings.destination, type=ExchangeType.TOPIC, durable=True)


def build_input_queue(broker_settings: BrokerSettings) -> RabbitQueue:
    """
    Входная очередь subscriber'а.

    Без `queue` в настройках каждый экземпляр получает свою анонимную
    exclusive-очередь, то есть каждое сообщение доставляется каждому
    запущенному subscriber'у один раз. С `queue` — durable очередь с этим
    именем, общая для всех экземпляров.
    """
    if broker_settings.queue:
        return RabbitQueue(
            broker_settings.queue,
            durable=True,
            routing_key=broker_settings.binding_key,
        )

    return RabbitQueue(
        f"{broker_settings.destination}.anonymous.{uuid.uuid4().hex[:12]}",
        durable=False,
        exclusive=True,
        auto_delete=True,
        routing_key=broker_settings.binding_key,
    )


__all__ = ["get_rabbit_broker", "build_exchange", "build_input_queue"]
