# ABOUTME: Exception taxonomy for weather data acquisition.
# ABOUTME: Every failure crossing the client boundary is a WeatherError carrying a descriptive message.


class WeatherError(Exception):
    """Base failure for the weather client; the message is the contract."""

    @property
    def message(self) -> str:
        return str(self)


class ConfigError(WeatherError):
    """The client is missing required configuration, no request was made."""


class RequestTimeoutError(WeatherError, TimeoutError):
    """The request was cancelled because it exceeded its timeout."""


class NetworkError(WeatherError):
    """The transport failed before a response was received."""


class ApiError(WeatherError):
    """The API answered with a non-success status or an embedded error body."""
