"""
Базовые настройки приложения.

Содержит общие настройки, которые не относятся к брокеру сообщений.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from relay.config.config_loader import BaseSettingsWithLoader


class AppSettings(BaseSettingsWithLoader):
    """Основные настройки приложения."""

    yaml_group = "app"

    # Идентификация приложения
    app_name: str = Field(default="stream-relay", description="Название приложения")
    app_version: str = Field(default="0.1.0", description="Версия приложения")
    environment: str = Field(default="dev", description="Окружение (dev/staging/prod)")

    # HTTP сервер publisher'а
    host: str = Field(default="0.0.0.0", description="Адрес HTTP сервера publisher")
    port: int = Field(default=8080, description="Порт HTTP сервера publisher")

    # Режимы работы
    debug: bool = Field(default=False, description="Режим отладки")

    # Логирование
    log_level: str = Field(default="INFO", description="Уровень логирования")

    model_config = SettingsConfigDict(env_prefix="APP_")


__all__ = ["AppSettings"]
