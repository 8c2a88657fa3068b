"""
Input checks performed before calling the projection engine.

``validate_inputs`` rejects out-of-range values, ``clamp_inputs`` pulls them
back into range the way the input sliders do.
"""

from __future__ import annotations
import logging
import math
from typing import Optional

from params import Params
from projection import ProjectionInput

logger = logging.getLogger(__name__)


def _is_integer(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def validate_inputs(
    start_age,
    monthly_savings,
    annual_return_rate: Optional[float] = None,
    params: Optional[Params] = None,
) -> ProjectionInput:
    """
    Check the three projection inputs and return them as a ProjectionInput.

    Raises:
        ValueError: If any value is outside the range accepted by the scheme
    """
    p = params or Params()
    if annual_return_rate is None:
        annual_return_rate = p.default_annual_return_rate

    if not _is_integer(start_age):
        raise ValueError(f"Start age must be a whole number, got {start_age!r}")
    start_age = int(start_age)
    if not p.min_start_age <= start_age < p.retirement_age:
        raise ValueError(
            f"Start age must be between {p.min_start_age} and "
            f"{p.retirement_age - 1}, got {start_age}"
        )

    try:
        monthly_savings = float(monthly_savings)
        annual_return_rate = float(annual_return_rate)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Savings and return rate must be numbers: {e}") from e

    if not math.isfinite(monthly_savings) or monthly_savings < 0:
        raise ValueError(
            f"Monthly savings must be a non-negative amount, got {monthly_savings}"
        )
    if monthly_savings > p.max_monthly_savings:
        raise ValueError(
            f"Monthly savings may not exceed {p.max_monthly_savings:,}, "
            f"got {monthly_savings:,.2f}"
        )
    if not math.isfinite(annual_return_rate):
        raise ValueError(f"Return rate must be finite, got {annual_return_rate}")

    return ProjectionInput(start_age, monthly_savings, annual_return_rate)


def _clamp(value: float, low: float, high: float, fallback: float, name: str) -> float:
    if not math.isfinite(value):
        logger.warning(f"{name}={value} is not finite, using {fallback}")
        return fallback
    clamped = min(max(value, low), high)
    if clamped != value:
        logger.warning(f"{name}={value} out of range, clamped to {clamped}")
    return clamped


def clamp_inputs(
    start_age,
    monthly_savings,
    annual_return_rate,
    params: Optional[Params] = None,
) -> ProjectionInput:
    """Pull each input into its allowed range instead of rejecting it."""
    p = params or Params()
    age = _clamp(
        float(start_age),
        p.min_start_age,
        p.retirement_age - 1,
        p.min_start_age,
        "start_age",
    )
    savings = _clamp(
        float(monthly_savings), 0.0, p.max_monthly_savings, 0.0, "monthly_savings"
    )
    rate = _clamp(
        float(annual_return_rate),
        0.0,
        p.max_annual_return_rate,
        p.default_annual_return_rate,
        "annual_return_rate",
    )
    return ProjectionInput(int(age), savings, rate)
