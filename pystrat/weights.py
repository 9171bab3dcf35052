"""Weighted estimates and survey weights."""

from typing import Literal

import numpy as np
import numpy.typing as npt
import pandas as pd

from .exceptions import ArithmeticIndeterminateError, ConfigurationError
from .grouping import stratum_sizes


def cycle_weights(
    w: float | list[float] | npt.NDArray[np.float64], n: int
) -> npt.NDArray[np.float64]:
    """Recycle weights to length `n`.

    Weights shorter than `n` are repeated, and the last repetition truncated, so
    that e.g. weights (1, 2) for 4 observations become (1, 2, 1, 2).

    """
    w = np.atleast_1d(np.asarray(w, dtype=float)).ravel()
    if w.size == 0:
        raise ConfigurationError("Weights must not be empty.")
    return np.resize(w, n)


def wtd_mean(
    x: list[float] | npt.NDArray[np.float64],
    w: float | list[float] | npt.NDArray[np.float64],
) -> float:
    r"""Calculate a weighted mean.

    Parameters
    ----------
     x : list_like
        Numerical vector.
     w : float or list_like
        Weights, recycled to have the same length as `x`.

    Returns
    -------
     mean : float
        \sum_i x_i * w_i / \sum_i w_i.

    """
    x = np.asarray(x, dtype=float)
    if len(x) == 0:
        raise ConfigurationError("Cannot calculate a weighted mean of no values.")

    w = cycle_weights(w, len(x))
    total = np.sum(w)
    if total == 0:
        raise ArithmeticIndeterminateError("Weights sum to zero.", total=total)
    return float(np.dot(x, w) / total)


def lin_comb(
    x: list[float] | npt.NDArray[np.float64],
    w: float | list[float] | npt.NDArray[np.float64],
) -> float:
    """Calculate the linear combination sum_i x_i * w_i.

    Weights are recycled to have the same length as `x`.

    """
    x = np.asarray(x, dtype=float)
    return float(np.dot(x, cycle_weights(w, len(x))))


def std(
    x: list[float] | npt.NDArray[np.float64],
    div: float | npt.NDArray[np.float64] | None = None,
) -> npt.NDArray[np.float64]:
    """Standardize a vector of weights.

    Parameters
    ----------
     x : list_like
        Weights.
     div : float, optional
        Divisor. Defaults to sum(x), so the result sums to 1.

    Notes
    -----
    Handy for building coefficients of linear combinations. For instance, the gap in
    mean income between men and women in Utah has coefficients
        std(is_utah * is_male * w) - std(is_utah * is_female * w).

    """
    x = np.asarray(x, dtype=float)
    if div is None:
        div = np.sum(x)
    if np.any(np.asarray(div) == 0):
        raise ArithmeticIndeterminateError("Cannot standardize by a zero divisor.")
    return x / div


def normalize_weights(
    w: list[float] | npt.NDArray[np.float64],
    kind: Literal["sum_to_n", "sum_to_1"] = "sum_to_n",
) -> npt.NDArray[np.float64]:
    """Renormalize weights.

    Weighted means are invariant to the normalization, so Horvitz-Thompson weights
    and either renormalization give the same estimates and standard errors.

    Parameters
    ----------
     w : list_like
        Weights.
     kind : ["sum_to_n", "sum_to_1"], optional
        "sum_to_n" divides by the mean weight, so weights sum to the sample size.
        "sum_to_1" divides by the total. Defaults to "sum_to_n".

    """
    w = np.asarray(w, dtype=float)
    if kind == "sum_to_n":
        return std(w, div=np.mean(w))
    if kind == "sum_to_1":
        return std(w)
    raise ConfigurationError(f"Unrecognized input {kind=:}")


def horvitz_thompson_weights(
    sample: pd.DataFrame,
    population: pd.DataFrame,
    by: str | list[str],
    count: str = "N",
) -> npt.NDArray[np.float64]:
    """Calculate post-stratification Horvitz-Thompson weights.

    Parameters
    ----------
     sample : pd.DataFrame
        One row per respondent.
     population : pd.DataFrame
        One row per stratum, with the stratification columns and the population size.
     by : str or list of str
        Stratification columns, present in both data frames.
     count : str, optional
        Column of `population` with the stratum population size. Defaults to "N".

    Returns
    -------
     w : npt.NDArray[np.float64]
        N_s / n_s for each respondent, where N_s is the population size and n_s the
        sample size of the respondent's stratum. These weights are constant within
        strata and sum to the total population of the sampled strata.

    """
    by = [by] if isinstance(by, str) else list(by)
    missing = [col for col in by if col not in sample.columns]
    missing += [col for col in [*by, count] if col not in population.columns]
    if missing:
        raise ConfigurationError(f"Unknown column(s): {', '.join(missing)}")

    if population.duplicated(subset=by).any():
        raise ConfigurationError("Population has more than one row for some strata.")

    merged = sample[by].merge(population[[*by, count]], on=by, how="left")
    if merged[count].isna().any():
        unmatched = merged.loc[merged[count].isna(), by].drop_duplicates()
        raise ConfigurationError(
            f"No population size for {len(unmatched)} sampled strata."
        )

    return merged[count].to_numpy(dtype=float) / stratum_sizes(sample[by])
