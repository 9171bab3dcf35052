"""Frequency and weighted-sum tables."""

from dataclasses import dataclass

import pandas as pd

from .exceptions import ConfigurationError


@dataclass
class TableSpec:
    """Table specification.

    Parameters
    ----------
    by : list of str
        Grouping columns. The table has one cell per combination of their levels.
    value : str, optional
        Column summed within each cell. When None, cells count rows.

    """

    by: list[str]
    value: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.by, str):
            self.by = [self.by]
        self.by = list(self.by)
        if len(self.by) == 0:
            raise ConfigurationError("Must specify at least one grouping column.")

    @property
    def columns(self) -> list[str]:
        """All columns the table reads."""
        if self.value is None:
            return list(self.by)
        return [*self.by, self.value]


def _levels(column: pd.Series) -> pd.Index:
    if isinstance(column.dtype, pd.CategoricalDtype):
        return pd.Index(column.cat.categories)
    return pd.Index(column.dropna().unique()).sort_values()


def tab(
    data: pd.DataFrame,
    by: TableSpec | str | list[str],
    value: str | None = None,
) -> pd.Series:
    """Tabulate row counts or totals over the strata formed by grouping columns.

    Parameters
    ----------
     data : pd.DataFrame
        Data set.
     by : TableSpec, str, or list of str
        Either a full table specification, or the grouping column(s).
     value : str, optional
        Column to sum within each cell. Ignored when `by` is a TableSpec.

    Returns
    -------
     table : pd.Series
        Indexed by every combination of the levels of the grouping columns, including
        combinations absent from `data` (which get 0). Named "Freq" for counts, or
        after `value` for totals.

    Examples
    --------
    With one row per sex x state x county and a "population" column,
        tab(data, ["sex", "age"], value="population")
    is the total population by sex and age, and
        tab(data, "age", value="population")
    the totals by age group.

    """
    spec = by if isinstance(by, TableSpec) else TableSpec(by=by, value=value)
    missing = [col for col in spec.columns if col not in data.columns]
    if missing:
        raise ConfigurationError(f"Unknown column(s): {', '.join(map(str, missing))}")

    grouped = data.groupby(spec.by, observed=True)
    if spec.value is None:
        table = grouped.size()
        name = "Freq"
    else:
        table = grouped[spec.value].sum()
        name = spec.value

    levels = [_levels(data[col]) for col in spec.by]
    if len(levels) == 1:
        full_index = pd.Index(levels[0], name=spec.by[0])
    else:
        full_index = pd.MultiIndex.from_product(levels, names=spec.by)

    table = table.reindex(full_index, fill_value=0)
    table.name = name
    return table


def as_frame(table: pd.Series, name: str | None = None) -> pd.DataFrame:
    """Convert a table to a long data frame, one row per cell."""
    return table.reset_index(name=name or table.name or "Freq")
