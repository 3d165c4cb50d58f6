"""
Yard Capacity Forecasting Module

Components:
- features: Cyclical and trend feature encoding
- engines: Tier selection and the persistence, heuristic-average and
  regression forecast engines
- exceptions: Forecasting error taxonomy
"""

from .features import FEATURE_NAMES, CapacityFeatures, FeatureEncoder
from .engines import (
    ForecastContext,
    PersistenceEngine,
    HeuristicAverageEngine,
    RegressionEngine,
    select_tier,
)
from .exceptions import ForecastError, InvalidForecastArgument, ModelFitFailure

__all__ = [
    "FEATURE_NAMES",
    "CapacityFeatures",
    "FeatureEncoder",
    "ForecastContext",
    "PersistenceEngine",
    "HeuristicAverageEngine",
    "RegressionEngine",
    "select_tier",
    "ForecastError",
    "InvalidForecastArgument",
    "ModelFitFailure",
]
