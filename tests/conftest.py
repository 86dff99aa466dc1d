import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from relay.config.config_loader import ConfigLoader
from relay.config.services import BrokerSettings


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Singleton-настройки и YAML кешируются: чистим между тестами."""
    ConfigLoader.clear_cache()
    yield
    ConfigLoader.clear_cache()


@pytest.fixture
def broker_settings():
    return BrokerSettings(
        host="rabbit",
        port=5672,
        username="guest",
        password="guest",
        destination="messages",
        connect_timeout=1.0,
    )


@pytest.fixture
def mock_logger():
    return MagicMock()


@pytest.fixture
def console_buffer():
    """Console, пишущая в буфер вместо stdout."""
    buffer = io.StringIO()
    console = Console(file=buffer, highlight=False, color_system=None)
    return console, buffer


@pytest.fixture
def mock_broker():
    broker = MagicMock()
    broker.connect = AsyncMock()
    broker.publish = AsyncMock()
    broker.stop = AsyncMock()
    return broker
