"""Estimation visualizations."""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.axes import Axes

from .base_classes import WeightingEstimator
from .population import JackknifeEstimator


def plot_leave_one_out(
    estimator: JackknifeEstimator,
    title: str | None = None,
    ylabel: str = "Leave-one-out Estimate",
    axis_label_size: int | None = None,
    tick_label_size: int | None = None,
    legend_label_size: int | None = None,
    legend_placement: str | None = None,
    ax: Axes | None = None,
) -> Axes:
    """Plot the leave-one-out estimates underlying a jackknife standard error.

    Parameters
    ----------
     estimator : JackknifeEstimator
        The estimator.
     title : str, optional
        Optional title for figure.
     ylabel : str, optional
        Label for y-axis.
     axis_label_size, tick_label_size, legend_label_size : int, optional
        Font sizes for various figure elements.
     legend_placement : str, optional
        Where to put the legend.
     ax : Axes, optional
        Where to plot the figure.

    Returns
    -------
     ax : Axes
        The figure. Each observation is a point colored by stratum; the dashed line
        marks the full-sample estimate. Points far from the line are influential.

    """
    df = pd.DataFrame(
        {
            "Observation": np.arange(len(estimator.outcomes)),
            ylabel: estimator.leave_one_out(),
            "Stratum": estimator.sample.strata.astype(str),
        }
    )

    if ax is None:
        _, ax = plt.subplots()
    else:
        plt.sca(ax)

    sns.scatterplot(data=df, x="Observation", y=ylabel, hue="Stratum", ax=ax)
    ax.axhline(estimator.point_estimate(), color="black", linestyle="--")

    if title is not None:
        ax.set_title(title, fontsize=axis_label_size)

    if axis_label_size is not None:
        ax.xaxis.label.set_fontsize(axis_label_size)
        ax.yaxis.label.set_fontsize(axis_label_size)

    if tick_label_size is not None:
        ax.tick_params(axis="both", which="major", labelsize=tick_label_size)

    ax.legend(title="Stratum", fontsize=legend_label_size, loc=legend_placement)
    return ax


def forest_plot(
    estimators: dict[str, WeightingEstimator],
    alpha: float = 0.10,
    title: str | None = None,
    xlabel: str = "Estimate",
    axis_label_size: int | None = None,
    tick_label_size: int | None = None,
    ax: Axes | None = None,
) -> tuple[pd.DataFrame, Axes]:
    """Plot point estimates and confidence intervals for several estimators.

    Parameters
    ----------
     estimators : dict_like
        Keys label each row of the plot, e.g. a state or a sub-population, and values
        are the corresponding estimators.
     alpha : float, optional
        Confidence intervals have coverage 1 - alpha. Defaults to 0.10.
     title : str, optional
        Optional title for figure.
     xlabel : str, optional
        Label for x-axis. Defaults to "Estimate".
     axis_label_size, tick_label_size : int, optional
        Font sizes for various figure elements.
     ax : Axes, optional
        Where to plot the figure.

    Returns
    -------
     df : pd.DataFrame
        One row per estimator with the point estimate, standard error, and confidence
        interval bounds.
     ax : Axes
        The figure.

    """
    rows = []
    for label, estimator in estimators.items():
        lb, ub = estimator.confidence_interval(alpha=alpha)
        rows.append(
            {
                "Estimator": label,
                "Point Estimate": estimator.point_estimate(),
                "Standard Error": estimator.standard_error(),
                "Lower Bound": lb,
                "Upper Bound": ub,
            }
        )
    df = pd.DataFrame(rows)

    if ax is None:
        _, ax = plt.subplots()
    else:
        plt.sca(ax)

    positions = np.arange(len(df))
    ax.errorbar(
        x=df["Point Estimate"],
        y=positions,
        xerr=[
            df["Point Estimate"] - df["Lower Bound"],
            df["Upper Bound"] - df["Point Estimate"],
        ],
        fmt="o",
        color="black",
        capsize=4,
    )
    ax.set_yticks(positions)
    ax.set_yticklabels(df["Estimator"])
    ax.invert_yaxis()
    ax.set_xlabel(xlabel)
    sns.despine(ax=ax, left=True)

    if title is not None:
        ax.set_title(title, fontsize=axis_label_size)

    if axis_label_size is not None:
        ax.xaxis.label.set_fontsize(axis_label_size)

    if tick_label_size is not None:
        ax.tick_params(axis="both", which="major", labelsize=tick_label_size)

    return df, ax
