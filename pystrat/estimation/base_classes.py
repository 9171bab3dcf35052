"""Base classes for estimation."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

import numpy as np
from scipy import stats

from ..exceptions import ArithmeticIndeterminateError


@dataclass
class JackknifeSettings:
    """Jackknife settings.

    Parameters
    ----------
    check : bool, default=True
        Whether to check that weights are constant within strata. Turning it off saves
        time when the caller has already verified this, but gives meaningless standard
        errors when weights do vary within strata.
    verbose : bool, default=False
        Whether to print progress.

    """

    check: bool = True
    verbose: bool = False


class WeightingEstimator(ABC):
    """Base class for weighting estimators."""

    @abstractmethod
    def point_estimate(self) -> float:
        """Calculate a point estimate."""

    @abstractmethod
    def variance(self) -> float:
        """Calculate the variance."""

    def standard_error(self) -> float:
        """Calculate the standard error."""
        return math.sqrt(self.variance())

    def pvalue(
        self,
        null_value: float,
        alternative: Literal["two-sided", "less", "greater"] = "two-sided",
    ) -> float:
        """Calculate a p-value.

        Computes a p-value against the null hypothesis:
            H0: theta = null_value,
        where theta is the quantity being estimated

        Parameters
        ----------
         null_value : float
            The hypothesized theta.
         alternative : ["two-sided", "less", "greater"], optional
            What kind of test:
              - "two-sided": H0: theta = `null_value` vs Halt: theta <> `null_value`.
              - "greater": H0: theta <= `null_value` vs Halt: theta > `null_value`.
              - "less": H0: theta >= `null_value` vs Halt: theta < `null_value`.
            Defaults to "two-sided".

        Returns
        -------
         p : float
            P-value.

        Raises
        ------
         ArithmeticIndeterminateError
            If the standard error is zero.

        """
        pe = self.point_estimate()
        se = self.standard_error()
        if se == 0:
            raise ArithmeticIndeterminateError(
                "Standard error is zero; p-value is undefined.", total=se
            )

        t = (pe - null_value) / se

        if alternative == "greater" or alternative == "two-sided":
            p_greater = stats.norm.sf(t)
            if alternative == "greater":
                return p_greater

        if alternative == "less" or alternative == "two-sided":
            p_less = stats.norm.cdf(t)
            if alternative == "less":
                return p_less

        if alternative == "two-sided":
            return min(1.0, 2.0 * min(p_less, p_greater))

        raise ValueError(f"Unrecognized input {alternative=:}")

    def confidence_interval(
        self,
        alpha: float = 0.10,
        alternative: Literal["two-sided", "less", "greater"] = "two-sided",
    ) -> tuple[float, float]:
        """Calculate confidence interval on a quantity, theta.

        Parameters
        ----------
         alpha : float, optional
            P-value threshold, e.g. specify alpha=0.05 for a 95% confidence interval.
            Defaults to 0.10, corresponding to a 90% confidence interval.
         alternative : ["two-sided", "less", "greater"], optional
            What kind of interval. See `pvalue`. Defaults to "two-sided".

        Returns
        -------
         lb, ub : float
            Lower and upper bounds on the confidence interval. For one-sided intervals,
            only one of these will be finite:
              - "two-sided": lb and ub both finite
              - "greater": lb finite, ub = np.inf
              - "less": lb = -np.inf, ub finite

        """
        pe = self.point_estimate()
        se = self.standard_error()
        if alternative == "two-sided":
            zcrit = stats.norm.isf(alpha / 2)
        else:
            zcrit = stats.norm.isf(alpha)

        if alternative == "greater" or alternative == "two-sided":
            lb = pe - zcrit * se
            if alternative == "greater":
                return lb, np.inf

        if alternative == "less" or alternative == "two-sided":
            ub = pe + zcrit * se
            if alternative == "less":
                return -np.inf, ub

        if alternative == "two-sided":
            return lb, ub

        raise ValueError(f"Unrecognized input {alternative=:}")
