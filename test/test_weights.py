"""Test weighted estimates and survey weights."""

import numpy as np
import pandas as pd
import pytest

from pystrat.datasets import rockies_population, rockies_survey
from pystrat.exceptions import ArithmeticIndeterminateError, ConfigurationError
from pystrat.grouping import capply, is_constant_within
from pystrat.weights import (
    cycle_weights,
    horvitz_thompson_weights,
    lin_comb,
    normalize_weights,
    std,
    wtd_mean,
)


def test_cycle_weights() -> None:
    np.testing.assert_array_equal(cycle_weights([1, 2], 5), [1, 2, 1, 2, 1])
    np.testing.assert_array_equal(cycle_weights(3.0, 3), [3.0, 3.0, 3.0])
    np.testing.assert_array_equal(cycle_weights([1, 2, 3], 2), [1, 2])

    with pytest.raises(ConfigurationError):
        cycle_weights([], 3)


class TestWtdMean:
    @staticmethod
    @pytest.mark.parametrize("seed,n", [(101, 5), (201, 50), (301, 1_000)])
    def test_unit_weights(seed: int, n: int) -> None:
        """With unit weights, the weighted mean is the arithmetic mean."""
        rng = np.random.default_rng(seed)
        x = rng.normal(size=n)
        assert wtd_mean(x, np.ones(n)) == pytest.approx(np.mean(x))
        assert wtd_mean(x, 1) == pytest.approx(np.mean(x))

    @staticmethod
    def test_cycled_weights() -> None:
        """Weights (1, 2) are treated as (1, 2, 1, 2)."""
        expected = (1 * 1 + 2 * 2 + 3 * 1 + 4 * 2) / 6
        assert wtd_mean([1, 2, 3, 4], [1, 2]) == pytest.approx(expected)
        assert wtd_mean([1, 2, 3, 4], [1, 2]) == pytest.approx(
            wtd_mean([1, 2, 3, 4], [1, 2, 1, 2])
        )

    @staticmethod
    def test_scale_invariance() -> None:
        x = np.array([3.0, 1.0, 4.0, 1.0, 5.0])
        w = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        assert wtd_mean(x, w) == pytest.approx(wtd_mean(x, 1e6 * w))

    @staticmethod
    def test_errors() -> None:
        with pytest.raises(ConfigurationError):
            wtd_mean([], [1.0])

        with pytest.raises(ConfigurationError):
            wtd_mean([1.0, 2.0], [])

        with pytest.raises(ArithmeticIndeterminateError):
            wtd_mean([1.0, 2.0], [1.0, -1.0])


class TestLinComb:
    @staticmethod
    def test_lin_comb() -> None:
        assert lin_comb([1, 2, 3, 4], [1, 2]) == pytest.approx(16.0)
        assert lin_comb([1, 2, 3], [0.5, 0.5, -1.0]) == pytest.approx(-1.5)

    @staticmethod
    def test_unit_sum_weights() -> None:
        """With weights summing to 1, a linear combination is a weighted mean."""
        x = np.array([10.0, 20.0, 30.0, 40.0])
        w = np.array([1.0, 1.0, 3.0, 5.0])
        assert lin_comb(x, std(w)) == pytest.approx(wtd_mean(x, w))

    @staticmethod
    def test_empty() -> None:
        assert lin_comb([], [1.0]) == 0.0
        with pytest.raises(ConfigurationError):
            lin_comb([1.0], [])


def test_std() -> None:
    w = np.array([1.0, 3.0, 4.0])
    np.testing.assert_allclose(std(w), [0.125, 0.375, 0.5])
    np.testing.assert_allclose(std(w, div=2.0), [0.5, 1.5, 2.0])
    assert np.sum(std(w)) == pytest.approx(1.0)

    with pytest.raises(ArithmeticIndeterminateError):
        std([1.0, -1.0])


def test_normalize_weights() -> None:
    w = np.array([2.0, 2.0, 8.0])
    np.testing.assert_allclose(normalize_weights(w), [0.5, 0.5, 2.0])
    assert np.sum(normalize_weights(w, "sum_to_n")) == pytest.approx(len(w))
    assert np.sum(normalize_weights(w, "sum_to_1")) == pytest.approx(1.0)

    with pytest.raises(ConfigurationError):
        normalize_weights(w, "sum_to_N")  # type: ignore[arg-type]


class TestHorvitzThompsonWeights:
    @staticmethod
    def test_weights() -> None:
        """Weights are N / n within each stratum and sum to the population."""
        ds = rockies_survey()
        dpop = rockies_population()
        w = horvitz_thompson_weights(ds, dpop, ["Gender", "State"])

        assert len(w) == len(ds)
        assert np.sum(w) == pytest.approx(dpop["N"].sum())
        assert is_constant_within(w, ds[["Gender", "State"]])
        # 1,500,000 Utah men represented by 6 respondents
        assert w[0] == pytest.approx(250_000)

    @staticmethod
    def test_weights_invariant_to_normalization() -> None:
        """Weighted means agree under all three normalizations."""
        ds = rockies_survey()
        w_ht = horvitz_thompson_weights(ds, rockies_population(), ["Gender", "State"])
        expected = wtd_mean(ds["Income"], w_ht)
        for kind in ["sum_to_n", "sum_to_1"]:
            actual = wtd_mean(ds["Income"], normalize_weights(w_ht, kind))
            assert actual == pytest.approx(expected)

    @staticmethod
    def test_hierarchical_weights() -> None:
        """Overall weights can be built from within-state weights.

        Within-state 'sum to n' weights, multiplied by (N_s / N) / (n_s / n), give
        the overall 'sum to n' weights.

        """
        ds = rockies_survey()
        w_o_ht = horvitz_thompson_weights(ds, rockies_population(), ["Gender", "State"])
        w_o_sn = normalize_weights(w_o_ht, "sum_to_n")

        ht_ws_mean = capply(w_o_ht, ds["State"], np.mean)
        w_ws_sn = w_o_ht / ht_ws_mean
        np.testing.assert_allclose(
            capply(w_ws_sn, ds["State"], np.sum), capply(w_ws_sn, ds["State"], len)
        )

        N_s = capply(w_o_ht, ds["State"], np.sum)
        n_s = capply(w_o_ht, ds["State"], len)
        w_o_sn2 = w_ws_sn * (N_s / np.sum(w_o_ht)) / (n_s / len(ds))
        np.testing.assert_allclose(w_o_sn2, w_o_sn)

    @staticmethod
    def test_missing_stratum() -> None:
        ds = rockies_survey()
        dpop = rockies_population()
        dpop = dpop[dpop["State"] != "Idaho"]
        with pytest.raises(ConfigurationError):
            horvitz_thompson_weights(ds, dpop, ["Gender", "State"])

    @staticmethod
    def test_duplicate_population_rows() -> None:
        ds = rockies_survey()
        dpop = rockies_population()
        dpop = pd.concat([dpop, dpop.iloc[:1]])
        with pytest.raises(ConfigurationError):
            horvitz_thompson_weights(ds, dpop, ["Gender", "State"])
