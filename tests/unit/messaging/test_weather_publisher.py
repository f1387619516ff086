"""
Weather Publisher Function Unit Tests.

Tests cover weather_publisher/function_app.py:
- Request validation (empty, malformed, wrong shape)
- Configuration errors (no publish attempted)
- Successful publish of user and random updates
- Internal error responses
"""
import json
import uuid
from unittest.mock import patch

import azure.functions as func
import pytest

from tests.conftest import user_function
from weather_publisher import function_app as publisher


PUBLISH_URL = "/api/weather/publish"
PUBLISH_RANDOM_URL = "/api/weather/publish-random"


def _request(body: bytes, url: str = PUBLISH_URL) -> func.HttpRequest:
    return func.HttpRequest(method="POST", url=url, body=body, headers={"Content-Type": "application/json"})


def _json(response: func.HttpResponse) -> dict:
    return json.loads(response.get_body())


@pytest.fixture
def publish():
    return user_function(publisher.publish_weather_update)


@pytest.fixture
def publish_random():
    return user_function(publisher.publish_random_weather)


@pytest.fixture
def mock_send():
    with patch("weather_publisher.function_app.send_weather_update") as mock:
        mock.side_effect = lambda settings, update, subject: update.id
        yield mock


# ==========================================
# Request Validation
# ==========================================

class TestPublishRequestValidation:
    """Tests for client input errors on /weather/publish."""

    def test_empty_body_returns_400(self, publish, service_bus_env, mock_send):
        response = publish(_request(b""))

        assert response.status_code == 400
        data = _json(response)
        assert data["success"] is False
        assert data["message"] == "Request body is empty"
        mock_send.assert_not_called()

    def test_malformed_json_returns_400(self, publish, service_bus_env, mock_send):
        response = publish(_request(b"{location: Vienna"))

        assert response.status_code == 400
        assert _json(response)["message"] == "Invalid JSON body"
        mock_send.assert_not_called()

    def test_deeply_nested_json_returns_400(self, publish, service_bus_env, mock_send):
        response = publish(_request(b"[" * 100000))

        assert response.status_code == 400
        assert _json(response)["message"] == "Invalid JSON body"
        mock_send.assert_not_called()

    def test_oversized_integer_literal_returns_400(self, publish, service_bus_env, mock_send):
        response = publish(_request(b'{"location": "X", "temperatureC": ' + b"9" * 5000 + b"}"))

        assert response.status_code == 400
        mock_send.assert_not_called()

    @pytest.mark.parametrize("body", [
        b"null",
        b"[1, 2]",
        b'{"temperatureC": "hot"}',
        b'{"location": "X", "temperatureC": 2147483648}',
        b'{"location": "X", "temperatureC": ' + str(10**400).encode() + b"}",
    ])
    def test_wrong_shape_returns_400(self, publish, service_bus_env, mock_send, body):
        response = publish(_request(body))

        assert response.status_code == 400
        assert _json(response)["message"] == "Invalid request format"
        mock_send.assert_not_called()


# ==========================================
# Configuration Errors
# ==========================================

class TestPublishConfiguration:
    """Tests for missing Service Bus settings."""

    def test_missing_connection_string_returns_500(self, publish, mock_send):
        response = publish(_request(b'{"location": "Vienna", "temperatureC": 20}'))

        assert response.status_code == 500
        assert _json(response)["message"] == "Service Bus not configured"
        mock_send.assert_not_called()

    def test_missing_queue_name_returns_500(self, publish, mock_send, monkeypatch):
        monkeypatch.setenv("ServiceBusConnectionString", "Endpoint=sb://test/")

        response = publish(_request(b'{"location": "Vienna", "temperatureC": 20}'))

        assert response.status_code == 500
        assert _json(response)["message"] == "Queue name not configured"
        mock_send.assert_not_called()

    def test_random_missing_config_returns_500(self, publish_random, mock_send):
        response = publish_random(_request(b"", url=PUBLISH_RANDOM_URL))

        assert response.status_code == 500
        assert _json(response)["message"] == "Service Bus not properly configured"
        mock_send.assert_not_called()


# ==========================================
# Successful Publish
# ==========================================

class TestPublishSuccess:
    """Tests for successful publishing."""

    def test_publish_returns_message_id(self, publish, service_bus_env, mock_send):
        response = publish(_request(b'{"location": "Vienna", "temperatureC": 25, "summary": "Warm"}'))

        assert response.status_code == 200
        assert response.mimetype == "application/json"
        data = _json(response)
        assert data["success"] is True
        uuid.UUID(data["messageId"])
        assert data["message"] == "Weather update for Vienna published successfully"
        assert "errorDetails" not in data

    def test_publish_builds_message_from_request(self, publish, service_bus_env, mock_send):
        publish(_request(b'{"location": "Vienna", "temperatureC": 25, "summary": "Warm"}'))

        settings, update, subject = mock_send.call_args[0]
        assert settings.queue_name == "weather-updates-queue"
        assert subject == "WeatherUpdate"
        assert update.location == "Vienna"
        assert update.temperature_c == 25
        assert update.temperature_f == 76
        assert update.summary == "Warm"
        assert update.source == "HTTP-Publisher-Function"

    def test_publish_uses_request_defaults(self, publish, service_bus_env, mock_send):
        publish(_request(b"{}"))

        update = mock_send.call_args[0][1]
        assert update.location == "Unknown"
        assert update.temperature_c == 0

    def test_published_message_id_matches_response(self, publish, service_bus_env, mock_send):
        response = publish(_request(b'{"location": "Oslo"}'))

        assert _json(response)["messageId"] == mock_send.call_args[0][1].id

    def test_publish_random(self, publish_random, service_bus_env, mock_send):
        response = publish_random(_request(b"", url=PUBLISH_RANDOM_URL))

        assert response.status_code == 200
        settings, update, subject = mock_send.call_args[0]
        assert subject == "RandomWeatherUpdate"
        assert update.source == "Random-Publisher-Function"
        assert update.location in publisher.RANDOM_LOCATIONS
        assert update.summary in publisher.RANDOM_SUMMARIES
        assert -20 <= update.temperature_c < 55
        data = _json(response)
        assert data["messageId"] == update.id
        assert data["message"] == f"Random weather update for {update.location} published successfully"

    @patch("weather_publisher.function_app.random")
    def test_random_values_come_from_fixed_lists(self, mock_random):
        mock_random.choice.side_effect = lambda values: values[-1]
        mock_random.randrange.return_value = 54

        update = publisher._generate_random_update()

        mock_random.randrange.assert_called_once_with(-20, 55)
        assert update.location == "Toronto"
        assert update.summary == "Scorching"
        assert update.temperature_c == 54


# ==========================================
# Internal Errors
# ==========================================

class TestPublishInternalErrors:
    """Tests for unexpected errors while publishing."""

    def test_send_failure_hides_exception_text(self, publish, service_bus_env, mock_send):
        mock_send.side_effect = RuntimeError("amqp link detached: secret-host")

        response = publish(_request(b'{"location": "Vienna"}'))

        assert response.status_code == 500
        data = _json(response)
        assert data["success"] is False
        assert data["message"] == "Internal server error"
        assert data["errorDetails"] == "RuntimeError"
        assert "secret-host" not in response.get_body().decode("utf-8")

    def test_send_failure_exposes_text_when_enabled(self, publish, service_bus_env, mock_send, monkeypatch):
        monkeypatch.setenv("EXPOSE_ERROR_DETAILS", "true")
        mock_send.side_effect = RuntimeError("amqp link detached")

        response = publish(_request(b'{"location": "Vienna"}'))

        assert response.status_code == 500
        assert _json(response)["message"] == "Internal server error: amqp link detached"

    def test_random_send_failure_returns_500(self, publish_random, service_bus_env, mock_send):
        mock_send.side_effect = RuntimeError("boom")

        response = publish_random(_request(b"", url=PUBLISH_RANDOM_URL))

        assert response.status_code == 500
        assert _json(response)["success"] is False
