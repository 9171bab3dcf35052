"""Post-stratification survey analysis with jackknife standard errors."""

from .exceptions import ArithmeticIndeterminateError, ConfigurationError
from .grouping import (
    capply,
    interaction,
    is_constant_within,
    strata_indices,
    stratum_sizes,
    up,
)
from .jackknife import (
    StratifiedSample,
    jackknife_standard_error,
    jk_lin_comb_se,
    jk_wtd_mean_se,
    jk_wtd_means,
    leave_one_out_estimates,
    prepare_sample,
)
from .tables import TableSpec, as_frame, tab
from .weights import (
    cycle_weights,
    horvitz_thompson_weights,
    lin_comb,
    normalize_weights,
    std,
    wtd_mean,
)

__all__ = [
    "capply",
    "interaction",
    "is_constant_within",
    "strata_indices",
    "stratum_sizes",
    "up",
    "TableSpec",
    "tab",
    "as_frame",
    "cycle_weights",
    "wtd_mean",
    "lin_comb",
    "std",
    "normalize_weights",
    "horvitz_thompson_weights",
    "StratifiedSample",
    "prepare_sample",
    "leave_one_out_estimates",
    "jackknife_standard_error",
    "jk_wtd_means",
    "jk_wtd_mean_se",
    "jk_lin_comb_se",
    "ConfigurationError",
    "ArithmeticIndeterminateError",
]
