"""Post-stratification jackknife estimates of standard error.

Each observation is dropped in turn, and the estimate recalculated on the remaining
sample. Weights are assumed constant within strata, so that each stratum's
population is apportioned equally among its sampled units. When an observation is
dropped, the weights of the remaining units in its stratum are scaled up by
n_s / (n_s - 1) so the stratum keeps its total weight. Other strata are unaffected.

"""

import time
from collections import namedtuple
from collections.abc import Callable
from typing import Any

import numpy as np
import numpy.typing as npt

from .exceptions import ArithmeticIndeterminateError, ConfigurationError
from .grouping import capply, interaction, is_constant_within, stratum_sizes
from .weights import lin_comb, wtd_mean

Estimator = Callable[[npt.NDArray[np.float64], npt.NDArray[np.float64]], float]

StratifiedSample = namedtuple("StratifiedSample", ["x", "strata", "w", "ns"])


def prepare_sample(
    x: list[float] | npt.NDArray[np.float64],
    by: Any = None,
    w: float | list[float] | npt.NDArray[np.float64] = 1.0,
    check: bool = True,
) -> StratifiedSample:
    """Validate and align inputs for a jackknife calculation.

    Parameters
    ----------
     x : list_like
        Response variable.
     by : key, list of keys, DataFrame, or None
        Stratification. Defaults to None, a single stratum.
     w : float or list_like
        Sampling weights, constant within each stratum. A single weight applies to
        every observation. Defaults to 1.
     check : bool, optional
        Whether to check that `w` is constant within strata. Defaults to True.

    Returns
    -------
     sample : StratifiedSample
        Named tuple of the response `x`, dense stratum codes `strata`, the weights
        `w`, and the size `ns` of the stratum containing each observation.

    """
    x = np.asarray(x, dtype=float)
    n = len(x)
    if n == 0:
        raise ConfigurationError("Must have at least one observation.")

    w = np.asarray(w, dtype=float)
    if w.size == 1:
        w = np.full(n, w.ravel()[0])
    elif w.shape != (n,):
        raise ConfigurationError(f"`w` has length {w.size} but `x` has length {n}.")

    strata = interaction(by, n=n)
    if check and not is_constant_within(w, strata):
        raise ConfigurationError("w must be constant within strata")

    ns = capply(x, strata, len).astype(np.int64)
    num_singletons = len(np.unique(strata[ns < 2]))
    if num_singletons > 0:
        raise ConfigurationError(
            f"{num_singletons} stratum/strata contain a single observation; every"
            " stratum needs at least two to drop one."
        )

    return StratifiedSample(x=x, strata=strata, w=w, ns=ns)


def _drop_one_sums(
    values: npt.NDArray[np.float64],
    strata: npt.NDArray[np.int64],
    ns: npt.NDArray[np.int64],
) -> npt.NDArray[np.float64]:
    """Calculate the adjusted total of `values` with each observation dropped.

    Dropping i removes values[i] and scales the rest of its stratum by
    ns / (ns - 1), adding (S - values[i]) / (ns - 1) where S is the stratum total.

    """
    stratum_totals = np.bincount(strata, weights=values)[strata]
    return np.sum(values) - values + (stratum_totals - values) / (ns - 1)


def leave_one_out_estimates(
    sample: StratifiedSample, estimator: Estimator, verbose: bool = False
) -> npt.NDArray[np.float64]:
    """Calculate the estimate with each observation of a prepared sample dropped."""
    x, strata, w, ns = sample
    n = len(x)
    closed_form = estimator is wtd_mean or estimator is lin_comb

    if verbose:
        start_time = time.time()
        method = "closed form" if closed_form else "explicit deletion"
        print(
            f"  Jackknife over {n} observations in {strata.max() + 1} strata"
            f" ({method})"
        )

    if closed_form:
        estimates = _drop_one_sums(x * w, strata, ns)
        if estimator is wtd_mean:
            totals = _drop_one_sums(w, strata, ns)
            if np.any(totals == 0):
                raise ArithmeticIndeterminateError(
                    "Weights sum to zero after dropping an observation."
                )
            estimates = estimates / totals
    else:
        estimates = np.empty(n)
        keep = np.ones(n, dtype=bool)
        for i in range(n):
            keep[i] = False
            ns_drop = stratum_sizes(strata[keep])
            w_drop = w[keep] * ns[keep] / ns_drop
            estimates[i] = estimator(x[keep], w_drop)
            keep[i] = True

    if verbose:
        end_time = time.time()
        print(
            "  Leave-one-out estimates calculated in"
            f" {1000 * (end_time - start_time):.03f} ms"
        )

    return estimates


def jackknife_standard_error(
    theta_hat: float,
    theta_hat_i: npt.NDArray[np.float64],
    ns: npt.NDArray[np.int64],
) -> float:
    r"""Combine leave-one-out estimates into a standard error.

    Parameters
    ----------
     theta_hat : float
        Full-sample estimate.
     theta_hat_i : npt.NDArray[np.float64]
        Leave-one-out estimates.
     ns : npt.NDArray[np.int64]
        Size of the stratum containing each observation.

    Returns
    -------
     se : float
        sqrt( \sum_i (theta_hat_i - theta_hat)^2 * (n_s - 1) / n_s ),
        where each squared deviation gets the correction factor of its own stratum
        rather than a global (n - 1) / n.

    """
    return float(np.sqrt(np.sum(np.square(theta_hat_i - theta_hat) * (ns - 1) / ns)))


def jk_wtd_means(
    x: list[float] | npt.NDArray[np.float64],
    by: Any = None,
    w: float | list[float] | npt.NDArray[np.float64] = 1.0,
    check: bool = True,
    estimator: Estimator = wtd_mean,
    verbose: bool = False,
) -> npt.NDArray[np.float64]:
    """Calculate drop-one estimates for the jackknife estimator of SE.

    Parameters
    ----------
     x : list_like
        Response variable.
     by : key, list of keys, DataFrame, or None
        Stratification variable or list of stratification variables. Defaults to
        None, a single stratum.
     w : float or list_like
        Sampling weights, e.g. Horvitz-Thompson weights or a renormed version. Must
        be constant within each stratum. Defaults to 1.
     check : bool, optional
        Check that `w` is constant within levels of `by`. Defaults to True.
     estimator : callable, optional
        Function of (x, w) giving the estimate. Defaults to `wtd_mean`.
     verbose : bool, optional
        Print progress. Defaults to False.

    Returns
    -------
     theta_hat_i : npt.NDArray[np.float64]
        The estimate with observation i dropped, for each i.

    Notes
    -----
    For `wtd_mean` and `lin_comb`, the drop-one estimates are calculated from
    stratum totals in linear time. Any other estimator is evaluated on each of the n
    reduced samples.

    """
    sample = prepare_sample(x, by, w, check=check)
    return leave_one_out_estimates(sample, estimator, verbose=verbose)


def jk_wtd_mean_se(
    x: list[float] | npt.NDArray[np.float64],
    by: Any = None,
    w: float | list[float] | npt.NDArray[np.float64] = 1.0,
    check: bool = True,
    estimator: Estimator = wtd_mean,
    verbose: bool = False,
) -> float:
    """Calculate a post-stratification jackknife estimate of SE of a weighted mean.

    Parameters
    ----------
     x : list_like
        Response variable.
     by : key, list of keys, DataFrame, or None
        Stratification variable or list of stratification variables. Defaults to
        None, a single stratum for unstratified samples.
     w : float or list_like
        Sampling weights, e.g. Horvitz-Thompson weights or a renormed version. Must
        be constant within each stratum. Defaults to 1.
     check : bool, optional
        Check that `w` is constant within levels of `by`. Defaults to True.
     estimator : callable, optional
        Function of (x, w) giving the estimate. Defaults to `wtd_mean`.
     verbose : bool, optional
        Print progress. Defaults to False.

    Returns
    -------
     se : float
        Jackknife estimate of the standard error.

    Notes
    -----
    With a single stratum and unit weights, this is the classical jackknife standard
    error of the mean, sd(x) / sqrt(n).

    """
    sample = prepare_sample(x, by, w, check=check)
    theta_hat = estimator(sample.x, sample.w)
    theta_hat_i = leave_one_out_estimates(sample, estimator, verbose=verbose)
    return jackknife_standard_error(theta_hat, theta_hat_i, sample.ns)


def jk_lin_comb_se(
    x: list[float] | npt.NDArray[np.float64],
    by: Any = None,
    w: float | list[float] | npt.NDArray[np.float64] = 1.0,
    check: bool = True,
    verbose: bool = False,
) -> float:
    """Calculate a post-stratification jackknife estimate of SE of a linear combination.

    Same as `jk_wtd_mean_se` with `lin_comb` as the estimator. With coefficients
    standardized to sum to 1, e.g. `std(w)`, this matches the SE of the weighted mean.

    """
    return jk_wtd_mean_se(
        x, by=by, w=w, check=check, estimator=lin_comb, verbose=verbose
    )
