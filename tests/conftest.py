"""
Pytest fixtures shared by the message function and weather API tests.
"""
import pytest


SERVICE_BUS_ENV = {
    "ServiceBusConnectionString": "Endpoint=sb://test.servicebus.windows.net/;SharedAccessKeyName=test;SharedAccessKey=dGVzdA==",
    "QueueName": "weather-updates-queue",
}


@pytest.fixture(autouse=True)
def mock_sleep(monkeypatch):
    """Skip time.sleep calls to speed up tests."""
    monkeypatch.setattr("time.sleep", lambda x: None)


@pytest.fixture(autouse=True)
def clean_service_bus_env(monkeypatch):
    """Start every test without Service Bus app settings."""
    for name in list(SERVICE_BUS_ENV) + ["EXPOSE_ERROR_DETAILS"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def service_bus_env(monkeypatch):
    """Configure the Service Bus app settings."""
    for name, value in SERVICE_BUS_ENV.items():
        monkeypatch.setenv(name, value)
    return SERVICE_BUS_ENV


def user_function(function):
    """
    Return the plain Python function behind an Azure Functions decorator.

    Blueprint decorators return a FunctionBuilder; build() exposes the
    wrapped user function.
    """
    if hasattr(function, "build"):
        return function.build().get_user_function()
    return function
