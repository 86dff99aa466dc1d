"""
Корневая конфигурация приложения.

Settings — лёгкий facade с @property, который всегда возвращает
singleton-экземпляры через get_instance(). После `ConfigLoader.clear_cache()`
следующее обращение перечитывает Env/YAML.
"""

from relay.config.base import AppSettings
from relay.config.services import BrokerSettings


class Settings:
    """Facade around singleton settings groups."""

    @property
    def app(self) -> AppSettings:
        return AppSettings.get_instance()

    @property
    def broker(self) -> BrokerSettings:
        return BrokerSettings.get_instance()


settings = Settings()

__all__ = ["Settings", "settings"]
