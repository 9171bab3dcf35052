"""Grouped computations over strata.

A stratification key ("by") is either a single categorical sequence or a collection
of categorical sequences evaluated jointly. Every helper here accepts:

 - None, meaning a single stratum containing every observation,
 - a single 1-D sequence (list, ndarray, pandas Series or Categorical),
 - a list or tuple of 1-D sequences, or
 - a pandas DataFrame, whose columns are evaluated jointly.

"""

from collections.abc import Callable
from typing import Any

import numpy as np
import numpy.typing as npt
import pandas as pd

from .exceptions import ConfigurationError


def _is_key_list(by: Any, n: int | None = None) -> bool:
    """Check whether `by` holds several keys rather than being a single key.

    A list with one entry per observation, some of which are not of length `n`, is a
    single key whose levels are sequences, e.g. tuples of (gender, state).

    """
    if not isinstance(by, (list, tuple)) or len(by) == 0:
        return False
    if not all(np.ndim(key) == 1 for key in by):
        return False
    if n is not None and len(by) == n:
        return all(len(key) == n for key in by)
    return True


def interaction(by: Any, n: int | None = None) -> npt.NDArray[np.int64]:
    """Collapse a stratification key into one integer code per observation.

    Parameters
    ----------
     by : key, list of keys, DataFrame, or None
        Stratification key. See module docstring.
     n : int, optional
        Expected number of observations. Required when `by` is None.
        Also separates a single key whose levels are tuples from a list of keys:
        a list of `n` entries that are not all of length `n` is a single key.
        Without `n`, a list of equal-length sequences is read as a list of keys.

    Returns
    -------
     codes : npt.NDArray[np.int64]
        Dense codes 0, ..., K-1, one per observation, where K is the number of
        distinct combinations of the constituent keys. Missing values form their own
        level.

    """
    if by is None:
        if n is None:
            raise ConfigurationError("Must specify `n` when `by` is None.")
        return np.zeros(n, dtype=np.int64)

    if isinstance(by, pd.DataFrame):
        keys = [by[col] for col in by.columns]
    elif _is_key_list(by, n):
        keys = list(by)
    else:
        keys = [by]

    if len(keys) == 0:
        raise ConfigurationError("`by` must contain at least one key.")

    lengths = {len(key) for key in keys}
    if len(lengths) > 1:
        raise ConfigurationError(
            f"Stratification keys must have equal lengths; got {sorted(lengths)}."
        )

    length = lengths.pop()
    if n is not None and length != n:
        raise ConfigurationError(f"`by` has length {length}, expected {n}.")

    if length == 0:
        return np.zeros(0, dtype=np.int64)

    codes = [
        pd.factorize(pd.Series(key), use_na_sentinel=False)[0] for key in keys
    ]
    if len(codes) == 1:
        return codes[0].astype(np.int64)

    # Rows of the stacked codes identify the joint level.
    _, inverse = np.unique(np.column_stack(codes), axis=0, return_inverse=True)
    return inverse.reshape(-1).astype(np.int64)


def strata_indices(codes: npt.NDArray[np.int64]) -> list[npt.NDArray[np.int64]]:
    """Map each stratum code to the ordered positions of its members.

    Parameters
    ----------
     codes : npt.NDArray[np.int64]
        Dense stratum codes, as returned by `interaction`.

    Returns
    -------
     indices : list of npt.NDArray[np.int64]
        `indices[k]` lists, in increasing order, the positions with code k.

    """
    if len(codes) == 0:
        return []
    order = np.argsort(codes, kind="stable")
    counts = np.bincount(codes)
    return np.split(order, np.cumsum(counts)[:-1])


def _take(values: Any, indices: npt.NDArray[np.int64]) -> Any:
    if isinstance(values, (pd.DataFrame, pd.Series)):
        return values.iloc[indices]
    return values[indices]


def capply(
    values: Any,
    by: Any,
    reduce: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> npt.NDArray[Any]:
    """Apply a function to each stratum and broadcast the results back.

    Parameters
    ----------
     values : list_like or DataFrame
        Values to split into chunks. A DataFrame is split by rows, and each chunk
        passed to `reduce` is the corresponding sub-frame.
     by : key, list of keys, DataFrame, or None
        Stratification key with one entry per element (row) of `values`.
     reduce : callable
        Function applied to each chunk. Should return either a single value, which
        is recycled to every position in the stratum, or one value per member of the
        stratum.
     *args, **kwargs
        Additional arguments passed to `reduce`.

    Returns
    -------
     result : npt.NDArray
        Array with the same length and order as `values`.

    Notes
    -----
    The result can be added as a column to the data frame `values` came from. For
    example, with one row per county and columns "state", "sex" and "population",
        capply(df["population"], [df["sex"], df["state"]], sum)
    is the total population within each state x sex combination, repeated for each
    county.

    """
    n = len(values)
    codes = interaction(by, n=n)
    if not isinstance(values, (pd.DataFrame, pd.Series)):
        values = np.asarray(values)

    out = np.empty(n, dtype=object)
    for indices in strata_indices(codes):
        result = reduce(_take(values, indices), *args, **kwargs)
        if np.ndim(result) == 0:
            out[indices] = result
            continue

        result = np.asarray(result)
        if result.ndim != 1:
            raise ConfigurationError(
                f"`reduce` returned an array with {result.ndim} dimensions;"
                " expected a scalar or a 1-D array."
            )
        if len(result) == 1:
            out[indices] = result[0]
        elif len(result) == len(indices):
            out[indices] = result
        else:
            raise ConfigurationError(
                f"`reduce` returned {len(result)} values for a stratum of size"
                f" {len(indices)}; expected 1 or {len(indices)}."
            )

    return np.array(out.tolist())


def stratum_sizes(by: Any, n: int | None = None) -> npt.NDArray[np.int64]:
    """Calculate the size of the stratum containing each observation."""
    codes = interaction(by, n=n)
    if len(codes) == 0:
        return np.zeros(0, dtype=np.int64)
    return np.bincount(codes)[codes]


def _is_constant(z: Any) -> bool:
    return pd.Series(z).nunique(dropna=False) <= 1


def is_constant_within(values: Any, by: Any) -> bool:
    """Check whether `values` take a single value within every stratum of `by`."""
    return bool(np.all(capply(values, by, _is_constant)))


def up(data: pd.DataFrame, by: Any) -> pd.DataFrame:
    """Keep one row per stratum and the variables invariant within strata.

    Parameters
    ----------
     data : pd.DataFrame
        Data set with one row per observation.
     by : str, list of str, or key
        Stratification. A string or list of strings names columns of `data`;
        anything else is interpreted as a key, as in `interaction`.

    Returns
    -------
     summary : pd.DataFrame
        The first row of each stratum, in order of first appearance, restricted to
        the columns of `data` that are constant within every stratum. Columns such
        as a county identifier within a state x sex stratification are dropped.

    """
    if isinstance(by, str):
        by = [by]
    if isinstance(by, list) and all(isinstance(col, str) for col in by):
        missing = [col for col in by if col not in data.columns]
        if missing:
            raise ConfigurationError(f"Unknown column(s): {', '.join(missing)}")
        by = data[by]

    codes = interaction(by, n=len(data))
    if len(data) == 0:
        return data.reset_index(drop=True)

    first = ~pd.Series(codes).duplicated().to_numpy()
    distinct = data.groupby(codes, sort=False).nunique(dropna=False)
    invariant = [col for col in data.columns if distinct[col].max() <= 1]
    return data.loc[first, invariant].reset_index(drop=True)
