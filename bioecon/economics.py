# MIT License
"""Economic utility functions for the bioeconomic engine.

This module defines the discounting used by the valuation sweeps.  The
functions are deliberately lightweight and do not depend on the rest of the
model structure.
"""
from __future__ import annotations


def discount_factor(discount_rate: float, years: float) -> float:
    """Return ``(1 + discount_rate) ** years``, the divisor of a future value."""
    return (1.0 + discount_rate) ** years


def present_value(value: float, discount_rate: float, years: float) -> float:
    """Discount a single cashflow received after ``years`` years.

    Parameters
    ----------
    value:
        Nominal cashflow.
    discount_rate:
        Discount rate as a decimal (e.g. 0.07 for 7%).
    years:
        Time until the cashflow is received.

    Returns
    -------
    float
        Present value of the cashflow.
    """
    return value / discount_factor(discount_rate, years)
