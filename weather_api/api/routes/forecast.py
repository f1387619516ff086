"""
Weather forecast endpoint.

Generates five random forecast records starting tomorrow.
"""

import random
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from fastapi import APIRouter

from weather_api.logger import logger
from weather_api.schemas.weather import WeatherForecast


router = APIRouter(tags=["Weather"])

SUMMARIES = [
    "Freezing", "Bracing", "Chilly", "Cool", "Mild", "Warm", "Balmy", "Hot", "Sweltering", "Scorching"
]

FORECAST_DAYS = 5
# Half-open range [min, max)
TEMPERATURE_MIN_C = -20
TEMPERATURE_MAX_C = 55


def generate_forecast(days: int = FORECAST_DAYS, start: Optional[date] = None) -> List[WeatherForecast]:
    """Build `days` forecasts for the days after `start` (default: today)."""
    start = start or date.today()
    return [
        WeatherForecast(
            date=start + timedelta(days=index),
            temperature_c=random.randrange(TEMPERATURE_MIN_C, TEMPERATURE_MAX_C),
            summary=random.choice(SUMMARIES),
        )
        for index in range(1, days + 1)
    ]


@router.get(
    "/weatherforecast",
    response_model=List[WeatherForecast],
    response_model_by_alias=True,
    name="GetWeatherForecast",
)
def get_weather_forecast():
    """Return five random weather forecasts."""
    logger.info(f"Weather forecast requested at {datetime.now(timezone.utc).isoformat()}")

    forecast = generate_forecast()

    logger.info(f"Generated {len(forecast)} weather forecasts")
    return forecast
