# MIT License
"""
Custom exceptions for the bioeconomic engine.
Provides domain-specific error handling with informative messages.
"""
from typing import Any


class BioeconError(Exception):
    """Base exception for all engine errors."""
    pass


class ConfigurationError(BioeconError, ValueError):
    """Raised when a parameter is invalid and the run must be rejected."""
    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        message = f"Invalid value for parameter '{param_name}': {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MissingExternalData(BioeconError):
    """Raised when the geospatial platform returns no value for a statistic."""
    def __init__(self, statistic: str):
        self.statistic = statistic
        super().__init__(f"No data reported for '{statistic}'")


class EmptyScenarioError(BioeconError, ValueError):
    """Raised when a scenario holds no yearly records to aggregate."""
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot perform '{operation}' on a scenario without yearly records.")
