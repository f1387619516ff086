"""
Weather update processing and delivery classification.

classify_delivery() turns one queue delivery into a DeliveryOutcome.
The queue trigger decides what to do with the outcome:

    SUCCESS           -> return, the host completes the message
    INVALID_FORMAT    -> dead-letter, never retried
    PARSE_ERROR       -> dead-letter, never retried
    PROCESSING_ERROR  -> raise, Service Bus redelivers until maxDeliveryCount

Source: message_functions/_shared/processing.py
Editable: Yes - This is shared runtime code packaged with the Function App
"""
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from _shared.models import WeatherUpdateMessage


PROCESSING_DELAY_SECONDS = 0.1

HIGH_TEMPERATURE_THRESHOLD_C = 30
FREEZING_TEMPERATURE_THRESHOLD_C = 0

REASON_INVALID_FORMAT = "InvalidMessageFormat"
REASON_JSON_PARSING = "JsonParsingError"
INVALID_FORMAT_DESCRIPTION = "Unable to deserialize message body"


class DeliveryKind(str, Enum):
    SUCCESS = "Success"
    INVALID_FORMAT = "InvalidFormat"
    PARSE_ERROR = "ParseError"
    PROCESSING_ERROR = "ProcessingError"


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of handling one delivery."""
    kind: DeliveryKind
    message: Optional[WeatherUpdateMessage] = None
    reason: Optional[str] = None
    description: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def retryable(self) -> bool:
        return self.kind == DeliveryKind.PROCESSING_ERROR

    @property
    def terminal(self) -> bool:
        """True when the message must be dead-lettered."""
        return self.kind in (DeliveryKind.INVALID_FORMAT, DeliveryKind.PARSE_ERROR)


@dataclass(frozen=True)
class WeatherTelemetry:
    """Custom telemetry recorded for a processed update."""
    properties: dict
    metrics: dict


def process_weather_data(update: WeatherUpdateMessage) -> WeatherTelemetry:
    """
    Run the downstream processing step for one weather update.

    Placeholder for real work (storage, notifications, workflows):
    waits PROCESSING_DELAY_SECONDS, raises temperature alerts and
    records telemetry.
    """
    time.sleep(PROCESSING_DELAY_SECONDS)

    if update.temperature_c > HIGH_TEMPERATURE_THRESHOLD_C:
        logging.warning(f"High temperature alert for {update.location}: {update.temperature_c}°C")
    elif update.temperature_c < FREEZING_TEMPERATURE_THRESHOLD_C:
        logging.warning(f"Freezing temperature alert for {update.location}: {update.temperature_c}°C")

    telemetry = WeatherTelemetry(
        properties={
            "Location": update.location,
            "Source": update.source,
            "Summary": update.summary,
        },
        metrics={
            "TemperatureC": float(update.temperature_c),
            "TemperatureF": float(update.temperature_f),
            "ProcessingDelay": (datetime.now(timezone.utc) - update.timestamp).total_seconds(),
        },
    )

    logging.info(
        f"Weather data processing completed for {update.location}. Custom telemetry recorded.",
        extra={"custom_dimensions": {**telemetry.properties, **telemetry.metrics}},
    )
    return telemetry


def classify_delivery(
    body,
    processor: Callable[[WeatherUpdateMessage], object] = process_weather_data
) -> DeliveryOutcome:
    """
    Parse and process one message body.

    Args:
        body: Raw message body (str or bytes)
        processor: Processing step run on a parsed update

    Returns:
        DeliveryOutcome describing how the trigger should settle the message.
        Processing errors are returned, not raised.
    """
    try:
        update = WeatherUpdateMessage.from_json(body)
    except (ValueError, RecursionError) as e:
        # ValueError covers json.JSONDecodeError
        return DeliveryOutcome(
            kind=DeliveryKind.PARSE_ERROR,
            reason=REASON_JSON_PARSING,
            description=str(e),
            error=e,
        )

    if update is None:
        return DeliveryOutcome(
            kind=DeliveryKind.INVALID_FORMAT,
            reason=REASON_INVALID_FORMAT,
            description=INVALID_FORMAT_DESCRIPTION,
        )

    logging.info(
        f"Weather update received - Location: {update.location}, "
        f"Temperature: {update.temperature_c}°C ({update.temperature_f}°F), "
        f"Summary: {update.summary}, Source: {update.source}, Timestamp: {update.timestamp.isoformat()}"
    )

    try:
        processor(update)
    except Exception as e:
        return DeliveryOutcome(kind=DeliveryKind.PROCESSING_ERROR, message=update, error=e)

    return DeliveryOutcome(kind=DeliveryKind.SUCCESS, message=update)
