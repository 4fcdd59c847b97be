"""
Winter's method for forecasting seasonal, trending time series.
"""

from winters.bootstrap import (
    moving_average,
    observed_seasonal_coefficients,
    average_seasonal_coefficients,
    normalize,
    trend_parameters,
    bootstrap,
)
from winters.forecaster import WintersForecaster

__version__ = "1.0.0"

__all__ = [
    "moving_average",
    "observed_seasonal_coefficients",
    "average_seasonal_coefficients",
    "normalize",
    "trend_parameters",
    "bootstrap",
    "WintersForecaster",
]
