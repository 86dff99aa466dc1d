"""
Централизованный загрузчик конфигурации.

Поддерживает загрузку из:
1. Environment variables и .env (приоритет 1)
2. YAML файлы (приоритет 2)
3. Значения по умолчанию

Пример использования:
    from relay.config.services import BrokerSettings

    broker_settings = BrokerSettings.get_instance()
    print(broker_settings.amqp_url)  # Загружено из Env/YAML
"""

import os
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, TypeVar

import yaml
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from relay.shared.exceptions import ConfigurationError

T = TypeVar("T", bound=BaseSettings)


class ConfigLoader:
    """
    Загрузчик YAML-конфигурации с кешем.

    Файл для текущего окружения (например `relay.prod.yaml`) имеет приоритет
    над базовым `relay.yaml`.
    """

    _cache: Dict[str, Any] = {}

    YAML_CONFIG_DIR = Path(os.getenv("RELAY_CONFIG_DIR", "config"))

    @classmethod
    def environment(cls) -> str:
        return os.getenv("ENVIRONMENT", "dev")

    @classmethod
    def load_from_yaml(cls, filename: str, group: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Загрузка конфигурации из YAML файла.

        Args:
            filename: Имя YAML файла (например: "relay.yaml")
            group: Группа конфигурации (опционально)

        Returns:
            Dict с конфигурацией или None если не найдено
        """
        cache_key = f"yaml:{filename}:{group}"
        if cache_key in cls._cache:
            return cls._cache[cache_key]

        env_filename = filename.replace(".yaml", f".{cls.environment()}.yaml")
        yaml_path = cls.YAML_CONFIG_DIR / env_filename

        if not yaml_path.exists():
            yaml_path = cls.YAML_CONFIG_DIR / filename

        if not yaml_path.exists():
            return None

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML config: {yaml_path}",
                details={"path": str(yaml_path)},
                original_error=e,
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"YAML config must be a mapping: {yaml_path}",
                details={"path": str(yaml_path)},
            )

        result = data.get(group) if group else data
        cls._cache[cache_key] = result
        return result

    @classmethod
    def clear_cache(cls):
        """Очистить кеш конфигураций (включая singleton-экземпляры настроек)."""
        cls._cache.clear()


class YamlGroupSettingsSource(PydanticBaseSettingsSource):
    """Источник настроек pydantic-settings поверх ConfigLoader."""

    def _load(self) -> Dict[str, Any]:
        yaml_file = getattr(self.settings_cls, "yaml_file", None)
        yaml_group = getattr(self.settings_cls, "yaml_group", None)
        if not (yaml_file or yaml_group):
            return {}
        filename = yaml_file or f"{self.settings_cls.__name__.lower()}.yaml"
        return ConfigLoader.load_from_yaml(filename, yaml_group) or {}

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return self._load().get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        data = self._load()
        return {k: v for k, v in data.items() if k in self.settings_cls.model_fields}


class BaseSettingsWithLoader(BaseSettings):
    """
    Базовый класс для настроек с поддержкой каскадной загрузки.

    Пример использования:
        class BrokerSettings(BaseSettingsWithLoader):
            yaml_group = "broker"

            host: str = "localhost"
            port: int = 5672
    """

    # Группа в YAML файле (переопределяется в наследниках)
    yaml_group: ClassVar[Optional[str]] = None

    # Имя YAML файла
    yaml_file: ClassVar[Optional[str]] = "relay.yaml"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # kwargs > Env > .env > YAML > defaults
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlGroupSettingsSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def get_instance(cls: Type[T]) -> T:
        """
        Получить singleton экземпляр настроек.

        Returns:
            Экземпляр настроек
        """
        cache_key = f"settings:{cls.__name__}"
        if cache_key not in ConfigLoader._cache:
            ConfigLoader._cache[cache_key] = cls()
        return ConfigLoader._cache[cache_key]
