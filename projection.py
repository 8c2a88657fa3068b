"""
Month-by-month projection of a matched savings account up to retirement,
followed by conversion of the final balance into a fixed-term monthly pension.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from params import Params

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectionInput:
    start_age: int
    monthly_savings: float
    annual_return_rate: float = Params.default_annual_return_rate


@dataclass(frozen=True)
class AnnualLedgerEntry:
    """Cumulative snapshot of the account after one simulated year"""
    age: int
    member_savings_accumulated: float
    govt_contribution_accumulated: float
    total_balance: float
    interest_earned_year: float


@dataclass(frozen=True)
class ProjectionResult:
    total_member_savings: float
    total_govt_contribution: float  # principal only
    total_interest: float
    total_balance_at_retirement: float
    monthly_pension: float
    details_by_year: Tuple[AnnualLedgerEntry, ...] = ()

    @property
    def years_simulated(self) -> int:
        return len(self.details_by_year)

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """Column-wise view of the ledger, used by the chart layer."""
        ledger = self.details_by_year
        interest = np.array([e.interest_earned_year for e in ledger], dtype=float)
        return {
            "age": np.array([e.age for e in ledger], dtype=int),
            "member_savings": np.array(
                [e.member_savings_accumulated for e in ledger], dtype=float
            ),
            "govt_contribution": np.array(
                [e.govt_contribution_accumulated for e in ledger], dtype=float
            ),
            "total_balance": np.array([e.total_balance for e in ledger], dtype=float),
            "interest_earned": interest,
            "cumulative_interest": np.cumsum(interest),
        }

    def govt_contribution_by_year(self) -> np.ndarray:
        """Government match credited within each simulated year."""
        cumulative = np.array(
            [e.govt_contribution_accumulated for e in self.details_by_year],
            dtype=float,
        )
        return np.diff(cumulative, prepend=0.0)


def monthly_rate_from_annual(annual_return_rate: float) -> float:
    """Effective monthly rate equivalent to an annual rate given in percent."""
    return (1 + annual_return_rate / 100) ** (1 / 12) - 1


def matching_rate_for_age(age: int, params: Optional[Params] = None) -> float:
    """
    Matching rate of the tier containing ``age``.

    Ages below the first tier get the first tier's rate and ages at or above
    the last tier's upper bound get the last tier's rate; callers validate
    the age domain.
    """
    p = params or Params()
    tiers = p.matching_tiers
    for age_from, age_to, rate in tiers:
        if age_from <= age < age_to:
            return rate
    if age < tiers[0][0]:
        return tiers[0][2]
    return tiers[-1][2]


def annuity_payment(principal: float, monthly_rate: float, months: int) -> float:
    """
    Level payment that exhausts ``principal`` after ``months`` payments.

    A zero or negative rate degenerates to straight-line depletion.
    """
    if monthly_rate > 0:
        return principal * monthly_rate / (1 - (1 + monthly_rate) ** (-months))
    return principal / months


def project(
    start_age: int,
    monthly_savings: float,
    annual_return_rate: float = Params.default_annual_return_rate,
    params: Optional[Params] = None,
) -> ProjectionResult:
    """
    Project the account from ``start_age`` up to the retirement age.

    Each month interest is credited on the previous closing balance first,
    then the member deposit is added, then the government match (capped per
    year). Deposits made in a month start earning interest the month after.

    Args:
        start_age: Age at the first simulated year. No year is simulated
            when it is at or above the retirement age.
        monthly_savings: Constant member deposit per month, non-negative.
        annual_return_rate: Nominal annual return in percent (2.5 = 2.5%).
        params: Scheme constants, defaults to ``Params()``.

    Returns:
        ProjectionResult with one ledger entry per simulated year.
    """
    p = params or Params()
    monthly_rate = monthly_rate_from_annual(annual_return_rate)

    balance = 0.0
    total_member_savings = 0.0
    total_govt_contribution = 0.0
    member_accumulated = 0.0
    govt_accumulated = 0.0
    ledger: List[AnnualLedgerEntry] = []

    for age in range(start_age, p.retirement_age):
        govt_this_year = 0.0
        interest_this_year = 0.0
        matching_rate = matching_rate_for_age(age, p)

        for _ in range(p.months_per_year):
            interest = balance * monthly_rate
            balance += interest
            interest_this_year += interest

            balance += monthly_savings
            total_member_savings += monthly_savings
            member_accumulated += monthly_savings

            match = monthly_savings * matching_rate
            if govt_this_year + match > p.max_govt_contribution_year:
                match = max(0.0, p.max_govt_contribution_year - govt_this_year)
            balance += match
            total_govt_contribution += match
            govt_accumulated += match
            govt_this_year += match

        ledger.append(
            AnnualLedgerEntry(
                age=age,
                member_savings_accumulated=member_accumulated,
                govt_contribution_accumulated=govt_accumulated,
                total_balance=balance,
                interest_earned_year=interest_this_year,
            )
        )

    total_interest = balance - total_member_savings - total_govt_contribution
    monthly_pension = annuity_payment(balance, monthly_rate, p.payout_months)

    logger.debug(
        "Projected %d years from age %s: balance=%.2f pension=%.2f",
        len(ledger),
        start_age,
        balance,
        monthly_pension,
    )

    return ProjectionResult(
        total_member_savings=total_member_savings,
        total_govt_contribution=total_govt_contribution,
        total_interest=total_interest,
        total_balance_at_retirement=balance,
        monthly_pension=monthly_pension,
        details_by_year=tuple(ledger),
    )
