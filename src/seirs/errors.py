"""
Input validation errors for the SEIRS engine.

All errors are raised before any integration work starts.
"""


class InvalidParameterError(ValueError):
    """A model input violates its required bound."""

    def __init__(self, name: str, value, requirement: str):
        self.name = name
        self.value = value
        self.requirement = requirement
        super().__init__(f"{name} must be {requirement} (got {value!r})")


class RangeViolation(InvalidParameterError):
    """Value outside a closed interval, e.g. S0 or vaccination_rate."""

    def __init__(self, name: str, value, lower: float, upper: float):
        self.lower = lower
        self.upper = upper
        super().__init__(name, value, f"between {lower} and {upper}")


class NonPositiveValue(InvalidParameterError):
    def __init__(self, name: str, value):
        super().__init__(name, value, "positive")


class NegativeValue(InvalidParameterError):
    def __init__(self, name: str, value):
        super().__init__(name, value, "non-negative")
