"""
Weather message models shared by the publisher and consumer functions.

All models use camelCase field names on the wire. The publisher serializes
WeatherUpdateMessage with to_json() and the consumer reads it back with
from_json(), so both sides must agree on this module.

Source: message_functions/_shared/models.py
Editable: Yes - This is shared runtime code packaged with the Function App
"""
import json
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field, field_validator
from pydantic.alias_generators import to_camel


# Divisor kept for wire compatibility with existing consumers; not 9/5.
FAHRENHEIT_DIVISOR = 0.5556

DEFAULT_SOURCE = "WeatherAPI"

# Temperatures are 32-bit on the wire
TEMPERATURE_MIN_C = -2**31
TEMPERATURE_MAX_C = 2**31 - 1


def to_fahrenheit(temperature_c: int) -> int:
    """
    Convert Celsius to the Fahrenheit value carried on messages.

    The quotient is truncated toward zero before adding 32, e.g.
    20 -> 67 and 100 -> 211.
    """
    return 32 + int(temperature_c / FAHRENHEIT_DIVISOR)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WeatherUpdateMessage(CamelModel):
    """Weather update sent through the Service Bus queue."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    location: str = ""
    temperature_c: int = Field(0, ge=TEMPERATURE_MIN_C, le=TEMPERATURE_MAX_C)
    summary: str = ""
    timestamp: datetime = Field(default_factory=_utc_now)
    source: str = DEFAULT_SOURCE

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Timestamps without an offset are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @computed_field(alias="temperatureF")
    @property
    def temperature_f(self) -> int:
        return to_fahrenheit(self.temperature_c)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

    @classmethod
    def from_json(cls, text) -> Optional["WeatherUpdateMessage"]:
        """
        Parse a message body.

        Returns None when the body is valid JSON but not a weather update
        (null, a list, a scalar, fields of the wrong type, or a temperature
        outside the 32-bit range).

        Raises:
            ValueError: If the body is not JSON (json.JSONDecodeError) or holds
                an integer literal longer than the interpreter converts
            RecursionError: If the body nests too deeply to decode
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            return None
        try:
            return cls.model_validate(data)
        except ValidationError:
            return None


class PublishMessageRequest(CamelModel):
    """Request body for the publish endpoint."""
    location: str = "Unknown"
    temperature_c: int = Field(0, ge=TEMPERATURE_MIN_C, le=TEMPERATURE_MAX_C)
    summary: str = ""

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "location": "Vienna",
            "temperatureC": 21,
            "summary": "Mild"
        }
    })


class MessagePublishResponse(CamelModel):
    """Response body returned by both publish endpoints."""
    success: bool
    message_id: str = ""
    message: str = ""
    timestamp: datetime = Field(default_factory=_utc_now)
    error_details: Optional[str] = None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)
