"""Test frequency and weighted-sum tables."""

import pandas as pd
import pytest

from pystrat.datasets import rockies_population, rockies_survey
from pystrat.exceptions import ConfigurationError
from pystrat.tables import TableSpec, as_frame, tab


class TestTab:
    @staticmethod
    def test_counts() -> None:
        """Count rows per state."""
        table = tab(rockies_survey(), "State")
        assert table.name == "Freq"
        assert table.to_dict() == {"Arizona": 10, "Idaho": 10, "Utah": 10}

    @staticmethod
    def test_counts_two_way() -> None:
        table = tab(rockies_survey(), ["State", "Gender"])
        assert table.loc[("Utah", "Male")] == 6
        assert table.loc[("Idaho", "Female")] == 7
        assert table.sum() == 30

    @staticmethod
    def test_totals() -> None:
        """Sum a value column per stratum."""
        table = tab(rockies_population(), TableSpec(by=["State"], value="N"))
        assert table.name == "N"
        assert table["Utah"] == 3_000_000
        assert table["Idaho"] == 1_600_000
        assert table["Arizona"] == 7_000_000

    @staticmethod
    def test_empty_cells() -> None:
        """Combinations absent from the data appear with zero."""
        df = pd.DataFrame(
            {
                "a": ["x", "x", "y"],
                "b": ["p", "q", "p"],
                "v": [1.0, 2.0, 3.0],
            }
        )
        table = tab(df, ["a", "b"], value="v")
        assert len(table) == 4
        assert table.loc[("y", "q")] == 0
        assert table.loc[("x", "q")] == 2.0

    @staticmethod
    def test_unknown_column() -> None:
        with pytest.raises(ConfigurationError):
            tab(rockies_survey(), ["State", "County"])

        with pytest.raises(ConfigurationError):
            tab(rockies_survey(), "State", value="Population")


def test_table_spec() -> None:
    spec = TableSpec(by="State", value="N")
    assert spec.by == ["State"]
    assert spec.columns == ["State", "N"]

    with pytest.raises(ConfigurationError):
        TableSpec(by=[])


def test_as_frame() -> None:
    """Tables convert to long data frames, one row per cell."""
    df = as_frame(tab(rockies_survey(), ["State", "Gender"]))
    assert list(df.columns) == ["State", "Gender", "Freq"]
    assert len(df) == 6
    row = df[(df["State"] == "Arizona") & (df["Gender"] == "Female")]
    assert row["Freq"].item() == 3
