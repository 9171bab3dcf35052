"""Custom exceptions."""


class ConfigurationError(ValueError):
    """Raised when inputs are malformed or inconsistent with each other.

    Examples include length mismatches between outcomes, strata and weights, weights
    that vary within a stratum, and strata too small to drop an observation from.

    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Pretty-print error."""
        return self.message


class ArithmeticIndeterminateError(ArithmeticError):
    """Raised when a calculation would divide by a zero total."""

    def __init__(self, message: str, total: float = 0.0) -> None:
        super().__init__(message)
        self.message = message
        self.total = total

    def __str__(self) -> str:
        """Pretty-print error."""
        return f"{self.message} (total = {self.total:.03g})"
