"""Post-stratified population estimators."""

from abc import abstractmethod
from typing import Any

import numpy as np
import numpy.typing as npt

from ..grouping import capply
from ..jackknife import (
    StratifiedSample,
    jackknife_standard_error,
    leave_one_out_estimates,
    prepare_sample,
)
from ..weights import lin_comb, wtd_mean
from .base_classes import JackknifeSettings, WeightingEstimator


class JackknifeEstimator(WeightingEstimator):
    """Base class for stratified estimators with jackknife standard errors.

    Parameters
    ----------
     outcomes : list_like
        Outcomes or responses.
     strata : key, list of keys, DataFrame, or None
        Stratification. Defaults to None, a single stratum.
     weights : float or list_like
        Sampling weights, constant within each stratum. Defaults to 1.
     settings : JackknifeSettings, optional
        Jackknife settings.

    """

    @staticmethod
    @abstractmethod
    def estimate(x: npt.NDArray[np.float64], w: npt.NDArray[np.float64]) -> float:
        """Calculate the statistic on a (possibly reduced) sample."""

    def __init__(
        self,
        outcomes: list[float | int] | npt.NDArray[np.float64 | np.int64],
        strata: Any = None,
        weights: float | list[float] | npt.NDArray[np.float64] = 1.0,
        settings: JackknifeSettings | None = None,
    ) -> None:
        if settings is None:
            self.settings = JackknifeSettings()
        else:
            self.settings = settings

        self.sample: StratifiedSample = prepare_sample(
            outcomes, strata, weights, check=self.settings.check
        )
        self._theta_hat_i: npt.NDArray[np.float64] | None = None

    @property
    def outcomes(self) -> npt.NDArray[np.float64]:
        return self.sample.x

    @property
    def weights(self) -> npt.NDArray[np.float64]:
        return self.sample.w

    def stratum_sizes(self) -> npt.NDArray[np.int64]:
        """Size of the stratum containing each observation."""
        return self.sample.ns

    def point_estimate(self) -> float:
        """Calculate a point estimate."""
        return self.estimate(self.sample.x, self.sample.w)

    def leave_one_out(self) -> npt.NDArray[np.float64]:
        """Calculate the estimate with each observation dropped in turn."""
        if self._theta_hat_i is None:
            self._theta_hat_i = leave_one_out_estimates(
                self.sample, self.estimate, verbose=self.settings.verbose
            )
        return self._theta_hat_i

    def variance(self) -> float:
        """Calculate the jackknife variance."""
        se = jackknife_standard_error(
            self.point_estimate(), self.leave_one_out(), self.sample.ns
        )
        return se * se

    def stratum_estimates(self) -> npt.NDArray[np.float64]:
        """Calculate the estimate within each stratum, one entry per observation."""
        return capply(
            np.arange(len(self.sample.x)),
            self.sample.strata,
            lambda idx: self.estimate(self.sample.x[idx], self.sample.w[idx]),
        )


class StratifiedMeanEstimator(JackknifeEstimator):
    r"""Post-stratified weighted mean.

    Notes
    -----
    The point estimate is
        \hat{Y} = \sum_i w_i * y_i / \sum_i w_i,
    and the standard error is the stratified jackknife estimate, see
    `jk_wtd_mean_se`.

    """

    estimate = staticmethod(wtd_mean)


class LinearCombinationEstimator(JackknifeEstimator):
    r"""Linear combination of responses.

    Notes
    -----
    The point estimate is
        \hat{theta} = \sum_i w_i * y_i,
    where the coefficients w_i are constant within strata. Linear combinations cover
    estimands that are not weighted means, such as the difference between the means of
    two sub-populations, with coefficients std(w * in_a) - std(w * in_b).

    """

    estimate = staticmethod(lin_comb)
