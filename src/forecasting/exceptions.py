"""Errors raised by the capacity forecasting core."""


class ForecastError(Exception):
    """Base exception for capacity forecasting errors."""
    pass


class InvalidForecastArgument(ForecastError, ValueError):
    """Raised when the horizon or capacity of a request is out of range."""
    pass


class ModelFitFailure(ForecastError):
    """
    Raised when the regression model cannot be fitted.

    Internal only: the forecast service catches it and falls back to
    hour-of-day averaging.
    """
    pass
