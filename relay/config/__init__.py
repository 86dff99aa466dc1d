"""
Конфигурация приложения.

Модуль содержит:
- Загрузчик конфигурации (config_loader.py)
- Настройки приложения (base.py) и брокера (services.py)
- Централизованный facade (settings.py)

Пример использования:
    from relay.config import settings

    print(settings.app.port)
    print(settings.broker.destination)
"""

from relay.config.base import AppSettings
from relay.config.config_loader import ConfigLoader
from relay.config.services import BrokerSettings
from relay.config.settings import Settings, settings

__all__ = [
    "settings",
    "Settings",
    "AppSettings",
    "BrokerSettings",
    "ConfigLoader",
]
