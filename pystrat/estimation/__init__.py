"""Estimation utilities."""

from .base_classes import JackknifeSettings, WeightingEstimator
from .population import (
    JackknifeEstimator,
    LinearCombinationEstimator,
    StratifiedMeanEstimator,
)
from .visualizations import forest_plot, plot_leave_one_out

__all__ = [
    "JackknifeSettings",
    "WeightingEstimator",
    "JackknifeEstimator",
    "StratifiedMeanEstimator",
    "LinearCombinationEstimator",
    "forest_plot",
    "plot_leave_one_out",
]
