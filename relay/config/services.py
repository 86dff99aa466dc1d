"""
Настройки брокера сообщений (RabbitMQ).

Явная конфигурация каналов: строка подключения и имя destination, к которому
привязаны выходной канал publisher'а и входной канал subscriber'а.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from relay.config.config_loader import BaseSettingsWithLoader


class BrokerSettings(BaseSettingsWithLoader):
    """Настройки RabbitMQ."""

    yaml_group = "broker"

    # Подключение
    host: str = Field(default="localhost", description="Хост RabbitMQ")
    port: int = Field(default=5672, description="Порт AMQP")
    username: str = Field(default="guest", description="Пользователь")
    password: str = Field(default="guest", description="Пароль")
    vhost: str = Field(default="/", description="Virtual host")
    url: Optional[str] = Field(
        default=None,
        description="Полный AMQP URL (перекрывает host/port/username/password/vhost)",
    )
    connect_timeout: float = Field(default=5.0, gt=0, description="Таймаут подключения (сек)")

    # Каналы
    destination: str = Field(default="messages", min_length=1, description="Topic exchange каналов")
    routing_key: Optional[str] = Field(
        default=None,
        description="Routing key публикации (по умолчанию равен destination)",
    )
    binding_key: str = Field(default="#", description="Binding key входной очереди")
    queue: Optional[str] = Field(
        default=None,
        description="Именованная durable очередь subscriber'а (иначе анонимная на экземпляр)",
    )

    model_config = SettingsConfigDict(env_prefix="BROKER_")

    @property
    def amqp_url(self) -> str:
        """AMQP URL для подключения."""
        if self.url:
            return self.url
        vhost = self.vhost if self.vhost.startswith("/") else f"/{self.vhost}"
        return f"amqp://{self.username}:{self.password}@{self.host}:{self.port}{vhost}"

    @property
    def publish_routing_key(self) -> str:
        return self.routing_key or self.destination


__all__ = ["BrokerSettings"]
