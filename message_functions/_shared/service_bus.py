"""
Service Bus publishing helpers for the weather publisher functions.

Each call opens its own ServiceBusClient and queue sender and closes both
before returning. Nothing is cached between invocations.

Source: message_functions/_shared/service_bus.py
Editable: Yes - This is shared runtime code packaged with the Function App
"""
import logging

from azure.servicebus import ServiceBusClient, ServiceBusMessage

from _shared.env_utils import ServiceBusSettings
from _shared.models import WeatherUpdateMessage


CONTENT_TYPE_JSON = "application/json"
SUBJECT_WEATHER_UPDATE = "WeatherUpdate"
SUBJECT_RANDOM_WEATHER_UPDATE = "RandomWeatherUpdate"


def build_service_bus_message(update: WeatherUpdateMessage, subject: str) -> ServiceBusMessage:
    """
    Wrap a weather update in a Service Bus message.

    The broker message id mirrors the update id. Location, Temperature and
    Source are attached as application properties for filtering/routing.
    """
    return ServiceBusMessage(
        update.to_json(),
        message_id=update.id,
        content_type=CONTENT_TYPE_JSON,
        subject=subject,
        application_properties={
            "Location": update.location,
            "Temperature": update.temperature_c,
            "Source": update.source,
        },
    )


def send_weather_update(
    settings: ServiceBusSettings,
    update: WeatherUpdateMessage,
    subject: str = SUBJECT_WEATHER_UPDATE
) -> str:
    """
    Publish a weather update to the configured queue.

    Args:
        settings: Connection string and queue name
        update: The message to publish
        subject: Broker subject label

    Returns:
        The published message id
    """
    message = build_service_bus_message(update, subject)

    with ServiceBusClient.from_connection_string(settings.connection_string) as client:
        with client.get_queue_sender(queue_name=settings.queue_name) as sender:
            sender.send_messages(message)

    logging.info(f"Sent message {update.id} to queue {settings.queue_name} (subject={subject})")
    return update.id
