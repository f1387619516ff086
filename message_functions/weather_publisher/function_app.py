"""
Weather Publisher Azure Function.

HTTP-triggered functions that publish weather updates to the Service Bus
queue consumed by the weather consumer.

Architecture:
    Client → [HTTP POST] → Weather Publisher → Service Bus Queue

Endpoints:
    POST /api/weather/publish         - publish the update in the request body
    POST /api/weather/publish-random  - publish a randomly generated update

Source: message_functions/weather_publisher/function_app.py
Editable: Yes - This is the runtime Azure Function code
"""
import json
import os
import sys
import logging
import random
from datetime import datetime, timezone

import azure.functions as func
from pydantic import ValidationError

# Handle import path for shared module
try:
    from _shared.env_utils import (
        SERVICE_BUS_CONNECTION_SETTING,
        QUEUE_NAME_SETTING,
        env_flag,
        get_service_bus_settings,
        require_env,
        ServiceBusSettings,
    )
    from _shared.models import MessagePublishResponse, PublishMessageRequest, WeatherUpdateMessage
    from _shared.service_bus import (
        SUBJECT_RANDOM_WEATHER_UPDATE,
        SUBJECT_WEATHER_UPDATE,
        send_weather_update,
    )
except ModuleNotFoundError:
    _func_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if _func_dir not in sys.path:
        sys.path.insert(0, _func_dir)
    from _shared.env_utils import (
        SERVICE_BUS_CONNECTION_SETTING,
        QUEUE_NAME_SETTING,
        env_flag,
        get_service_bus_settings,
        require_env,
        ServiceBusSettings,
    )
    from _shared.models import MessagePublishResponse, PublishMessageRequest, WeatherUpdateMessage
    from _shared.service_bus import (
        SUBJECT_RANDOM_WEATHER_UPDATE,
        SUBJECT_WEATHER_UPDATE,
        send_weather_update,
    )


SOURCE_HTTP_PUBLISHER = "HTTP-Publisher-Function"
SOURCE_RANDOM_PUBLISHER = "Random-Publisher-Function"

# When enabled, 500 responses carry the exception text (off by default)
EXPOSE_ERROR_DETAILS_SETTING = "EXPOSE_ERROR_DETAILS"

RANDOM_LOCATIONS = [
    "New York", "London", "Tokyo", "Sydney", "Paris", "Berlin", "Mumbai", "Toronto"
]
RANDOM_SUMMARIES = [
    "Freezing", "Bracing", "Chilly", "Cool", "Mild", "Warm", "Balmy", "Hot", "Sweltering", "Scorching"
]
# Half-open range [min, max)
RANDOM_TEMPERATURE_MIN_C = -20
RANDOM_TEMPERATURE_MAX_C = 55

# Create Blueprint for registration by main function_app.py
bp = func.Blueprint()


def _json_response(payload: MessagePublishResponse, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        payload.to_json(),
        status_code=status_code,
        mimetype="application/json"
    )


def _error_response(message: str, status_code: int, error_details: str = None) -> func.HttpResponse:
    """Build a failed MessagePublishResponse; errorDetails defaults to the message."""
    return _json_response(
        MessagePublishResponse(
            success=False,
            message=message,
            error_details=error_details if error_details is not None else message,
        ),
        status_code,
    )


def _internal_error_response(error: Exception) -> func.HttpResponse:
    """500 response for unexpected errors. The exception text stays in the log."""
    if env_flag(EXPOSE_ERROR_DETAILS_SETTING):
        return _error_response(f"Internal server error: {error}", 500)
    return _error_response("Internal server error", 500, error_details=type(error).__name__)


def _success_response(update: WeatherUpdateMessage, message: str) -> func.HttpResponse:
    return _json_response(
        MessagePublishResponse(success=True, message_id=update.id, message=message),
        200,
    )


def _generate_random_update() -> WeatherUpdateMessage:
    return WeatherUpdateMessage(
        location=random.choice(RANDOM_LOCATIONS),
        temperature_c=random.randrange(RANDOM_TEMPERATURE_MIN_C, RANDOM_TEMPERATURE_MAX_C),
        summary=random.choice(RANDOM_SUMMARIES),
        timestamp=datetime.now(timezone.utc),
        source=SOURCE_RANDOM_PUBLISHER,
    )


@bp.function_name(name="PublishWeatherUpdate")
@bp.route(route="weather/publish", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def publish_weather_update(req: func.HttpRequest) -> func.HttpResponse:
    """
    Publish the weather update described by the request body.

    Body: {"location": str, "temperatureC": int, "summary": str}
    """
    logging.info(f"Weather update publish request received at {datetime.now(timezone.utc).isoformat()}")

    try:
        # 1. Parse request body
        body = req.get_body()
        if not body or not body.strip():
            return _error_response("Request body is empty", 400)

        try:
            data = json.loads(body)
        except (ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logging.error(f"Invalid JSON: {e}")
            return _error_response("Invalid JSON body", 400)

        if not isinstance(data, dict):
            return _error_response("Invalid request format", 400)

        try:
            publish_request = PublishMessageRequest.model_validate(data)
        except ValidationError as e:
            logging.error(f"Invalid publish request: {e}")
            return _error_response("Invalid request format", 400)

        # 2. Create weather update message
        update = WeatherUpdateMessage(
            location=publish_request.location,
            temperature_c=publish_request.temperature_c,
            summary=publish_request.summary,
            timestamp=datetime.now(timezone.utc),
            source=SOURCE_HTTP_PUBLISHER,
        )

        # 3. Get Service Bus configuration
        try:
            connection_string = require_env(SERVICE_BUS_CONNECTION_SETTING)
        except EnvironmentError:
            logging.error(f"{SERVICE_BUS_CONNECTION_SETTING} is not configured")
            return _error_response("Service Bus not configured", 500)

        try:
            queue_name = require_env(QUEUE_NAME_SETTING)
        except EnvironmentError:
            logging.error(f"{QUEUE_NAME_SETTING} is not configured")
            return _error_response("Queue name not configured", 500)

        # 4. Send message to Service Bus
        settings = ServiceBusSettings(connection_string=connection_string, queue_name=queue_name)
        send_weather_update(settings, update, SUBJECT_WEATHER_UPDATE)

        logging.info(
            f"Weather update message published successfully. MessageId: {update.id}, "
            f"Location: {update.location}, Temperature: {update.temperature_c}°C"
        )

        return _success_response(update, f"Weather update for {update.location} published successfully")

    except Exception as e:
        logging.exception(f"Error publishing weather update message: {e}")
        return _internal_error_response(e)


@bp.function_name(name="PublishRandomWeather")
@bp.route(route="weather/publish-random", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def publish_random_weather(req: func.HttpRequest) -> func.HttpResponse:
    """Publish a weather update generated from fixed location and summary lists."""
    logging.info(f"Random weather update publish request received at {datetime.now(timezone.utc).isoformat()}")

    try:
        update = _generate_random_update()

        try:
            settings = get_service_bus_settings()
        except EnvironmentError as e:
            logging.error(str(e))
            return _error_response("Service Bus not properly configured", 500)

        send_weather_update(settings, update, SUBJECT_RANDOM_WEATHER_UPDATE)

        logging.info(
            f"Random weather update published. MessageId: {update.id}, Location: {update.location}, "
            f"Temperature: {update.temperature_c}°C, Summary: {update.summary}"
        )

        return _success_response(update, f"Random weather update for {update.location} published successfully")

    except Exception as e:
        logging.exception(f"Error publishing random weather update: {e}")
        return _internal_error_response(e)
