"""Example data.

A made-up survey of incomes in three states along the eastern edge of the Rockies,
and the (imaginary) population of each Gender x State stratum.

"""

import pandas as pd

_INCOMES = {
    ("Male", "Utah"): [10, 11, 12, 13, 14, 15],
    ("Female", "Utah"): [16, 17, 18, 19],
    ("Male", "Idaho"): [20, 21, 22],
    ("Female", "Idaho"): [23, 24, 25, 26, 27, 28, 29],
    ("Male", "Arizona"): [30, 31, 32, 33, 34, 35, 36],
    ("Female", "Arizona"): [37, 38, 39],
}

_POPULATION = {
    ("Male", "Utah"): 1_500_000,
    ("Female", "Utah"): 1_500_000,
    ("Male", "Idaho"): 700_000,
    ("Female", "Idaho"): 900_000,
    ("Male", "Arizona"): 4_000_000,
    ("Female", "Arizona"): 3_000_000,
}


def rockies_survey() -> pd.DataFrame:
    """Survey responses: one row per respondent with Gender, State and Income."""
    return pd.DataFrame(
        [
            {"Gender": gender, "State": state, "Income": income}
            for (gender, state), incomes in _INCOMES.items()
            for income in incomes
        ]
    )


def rockies_population() -> pd.DataFrame:
    """Population size N of each Gender x State stratum."""
    return pd.DataFrame(
        [
            {"Gender": gender, "State": state, "N": size}
            for (gender, state), size in _POPULATION.items()
        ]
    )
