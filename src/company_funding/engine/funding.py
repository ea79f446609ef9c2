"""Funding calculator — eligibility, rate tier, and special-amount adjustments.

Pure function of one company's history: no I/O, no shared state, safe to
call concurrently for many companies.

Steps:
  1. Eligibility: every year of the total period present, and every year
     of the positive period strictly above zero.  Failing either → (0, 0).
  2. Rate tier: peak income over the total period; peak ≥ threshold takes
     the large-income rate, otherwise the standard rate.
     standard = peak × rate
  3. special = standard, then vowel bonus and decline penalty (see
     ``adjustments``) when special > 0.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from company_funding.config.policy import DEFAULT_POLICY, FundingPolicy
from company_funding.engine.adjustments import Adjustment, apply_adjustments
from company_funding.engine.incomes import incomes_by_year, peak_income
from company_funding.models.company import CompanyHistory, FundingResult

ZERO = Decimal(0)


def has_complete_history(by_year: dict[int, Decimal], policy: FundingPolicy) -> bool:
    """Every year of the total period carries a record."""
    return all(year in by_year for year in policy.total_period_years)


def has_recent_positive_income(by_year: dict[int, Decimal], policy: FundingPolicy) -> bool:
    """Every year of the positive period is present and strictly positive."""
    return all(
        year in by_year and by_year[year] > 0
        for year in policy.positive_period_years
    )


def is_eligible(by_year: dict[int, Decimal], policy: FundingPolicy = DEFAULT_POLICY) -> bool:
    return has_complete_history(by_year, policy) and has_recent_positive_income(by_year, policy)


def select_rate(peak: Decimal, policy: FundingPolicy = DEFAULT_POLICY) -> Decimal:
    """Large-income rate when *peak* reaches the threshold (inclusive)."""
    if peak >= policy.large_income_threshold:
        return policy.large_income_rate
    return policy.standard_income_rate


def compute_funding(
    history: CompanyHistory,
    policy: FundingPolicy = DEFAULT_POLICY,
    adjustments: Sequence[Adjustment] | None = None,
) -> FundingResult:
    """Compute standard and special fundable amounts for one company.

    Never raises for a well-formed history; ineligibility yields a zero
    result.  ``adjustments`` defaults to the policy's vowel bonus and
    decline penalty.
    """
    by_year = incomes_by_year(history)

    standard = ZERO
    if is_eligible(by_year, policy):
        peak = peak_income(by_year, policy.total_period_years)
        standard = peak * select_rate(peak, policy)

    special = apply_adjustments(standard, history, by_year, policy, adjustments)

    return FundingResult(
        id=history.id,
        name=history.name,
        standard_fundable_amount=standard,
        special_fundable_amount=special,
    )
