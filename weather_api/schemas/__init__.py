from weather_api.schemas.weather import WeatherForecast, HealthStatus

__all__ = ["WeatherForecast", "HealthStatus"]
