"""
Тесты HTTP API publisher'а.

Тестирует:
- GET /sendMessage/{message}: подтверждение, публикация, логирование
- Ошибки: broker недоступен (503), невалидное сообщение (422), 404
- Request ID и health endpoint
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from relay.config.base import AppSettings
from relay.config.services import BrokerSettings
from relay.main import create_app
from relay.messaging.models import Message
from relay.shared.exceptions import BrokerUnavailableError, InvalidMessageError


@pytest.fixture
def mock_publisher():
    publisher = MagicMock()
    publisher.send = AsyncMock()
    publisher.close = AsyncMock()
    publisher.destination = "messages"
    publisher.is_connected = False
    return publisher


@pytest.fixture
def app_logger():
    return MagicMock()


@pytest.fixture
def client(mock_publisher, app_logger):
    return TestClient(create_app(publisher=mock_publisher, app_logger=app_logger))


class TestSendMessage:
    def test_send_message_returns_confirmation(self, client, mock_publisher):
        response = client.get("/sendMessage/test123")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Message test123 sent to the publishers"
        mock_publisher.send.assert_awaited_once_with(Message(payload="test123"))

    def test_send_message_logs_receipt(self, client, app_logger):
        client.get("/sendMessage/hello")

        app_logger.info.assert_called_once_with("Receive message hello", component="publisher")

    def test_path_parameter_is_url_decoded(self, client, mock_publisher):
        response = client.get("/sendMessage/hello%20world")

        assert response.status_code == 200
        mock_publisher.send.assert_awaited_once_with(Message(payload="hello world"))

    def test_unicode_payload(self, client, mock_publisher):
        response = client.get("/sendMessage/привет")

        assert response.status_code == 200
        assert response.text == "Message привет sent to the publishers"
        mock_publisher.send.assert_awaited_once_with(Message(payload="привет"))

    def test_same_message_twice_publishes_twice(self, client, mock_publisher):
        client.get("/sendMessage/dup")
        client.get("/sendMessage/dup")

        assert mock_publisher.send.await_count == 2

    def test_missing_message_is_not_found(self, client, mock_publisher):
        response = client.get("/sendMessage/")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "http_error"
        mock_publisher.send.assert_not_called()

    def test_post_is_not_allowed(self, client):
        response = client.post("/sendMessage/test123")

        assert response.status_code == 405


class TestSendMessageErrors:
    def test_broker_unavailable_returns_503(self, client, mock_publisher):
        mock_publisher.send.side_effect = BrokerUnavailableError(
            "Message broker is unreachable",
            destination="messages",
            original_error=ConnectionRefusedError("refused"),
        )

        response = client.get("/sendMessage/test123")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "error"
        assert body["error"]["code"] == "broker_unavailable"
        assert body["error"]["details"] == {"destination": "messages"}
        assert body["error"]["request_id"] == response.headers["X-Request-ID"]
        assert "refused" not in response.text

    def test_broker_failure_is_logged_with_injected_logger(self, client, mock_publisher, app_logger):
        error = BrokerUnavailableError("Failed to publish message", destination="messages")
        mock_publisher.send.side_effect = error

        client.get("/sendMessage/x")

        app_logger.log_exception.assert_called_once()
        args, kwargs = app_logger.log_exception.call_args
        assert args[0] is error
        assert kwargs["component"] == "http"
        assert kwargs["context"]["destination"] == "messages"

    def test_invalid_message_returns_422(self, client, mock_publisher):
        mock_publisher.send.side_effect = InvalidMessageError("Message payload must be a non-empty string")

        response = client.get("/sendMessage/x")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "invalid_message"

    def test_unhandled_error_returns_500_without_details(self, mock_publisher, app_logger):
        mock_publisher.send.side_effect = RuntimeError("secret internals")
        client = TestClient(
            create_app(publisher=mock_publisher, app_logger=app_logger),
            raise_server_exceptions=False,
        )

        response = client.get("/sendMessage/test123")

        assert response.status_code == 500
        assert "secret internals" not in response.text
        logged = app_logger.log_exception.call_args_list
        assert logged
        assert all(isinstance(c.args[0], RuntimeError) for c in logged)


class TestAppSettings:
    def test_debug_flag_is_passed_to_fastapi(self, mock_publisher, app_logger):
        settings = SimpleNamespace(app=AppSettings(debug=True), broker=BrokerSettings())

        app = create_app(settings=settings, publisher=mock_publisher, app_logger=app_logger)

        assert app.debug is True


class TestRequestId:
    def test_request_id_is_propagated(self, client):
        response = client.get("/sendMessage/test123", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"
        assert "X-Process-Time-ms" in response.headers

    def test_request_id_is_generated(self, client):
        response = client.get("/sendMessage/test123")

        assert len(response.headers["X-Request-ID"]) == 8


class TestHealth:
    def test_health_reports_broker_state(self, client):
        response = client.get("/utility/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["broker"] == {"destination": "messages", "connected": False}


class TestLifespan:
    def test_shutdown_closes_publisher(self, mock_publisher, app_logger):
        with TestClient(create_app(publisher=mock_publisher, app_logger=app_logger)) as client:
            client.get("/sendMessage/test123")
            mock_publisher.close.assert_not_called()

        mock_publisher.close.assert_awaited_once()


class TestRequestLogging:
    def test_slow_request_is_logged_with_injected_logger(self, client, app_logger):
        with patch("relay.main.SLOW_REQUEST_THRESHOLD_MS", -1):
            client.get("/sendMessage/test123")

        app_logger.structured.assert_called_once()
        args, kwargs = app_logger.structured.call_args
        assert args == ("warning", "slow_request")
        assert kwargs["path"] == "/sendMessage/test123"
