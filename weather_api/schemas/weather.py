import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel


# Same divisor as the weather update messages in message_functions/_shared/models.py
FAHRENHEIT_DIVISOR = 0.5556


def to_fahrenheit(temperature_c: int) -> int:
    return 32 + int(temperature_c / FAHRENHEIT_DIVISOR)


class WeatherForecast(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: dt.date
    temperature_c: int
    summary: Optional[str] = None

    @computed_field(alias="temperatureF")
    @property
    def temperature_f(self) -> int:
        return to_fahrenheit(self.temperature_c)


class HealthStatus(BaseModel):
    status: str
    timestamp: dt.datetime
    version: str
