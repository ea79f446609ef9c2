"""Engine — the funding calculation."""

from company_funding.engine.adjustments import (
    Adjustment,
    apply_adjustments,
    default_adjustments,
    income_declined,
    starts_with_vowel,
)
from company_funding.engine.funding import compute_funding, is_eligible, select_rate
from company_funding.engine.incomes import income_for_year, incomes_by_year, peak_income

__all__ = [
    "compute_funding",
    "is_eligible",
    "select_rate",
    "incomes_by_year",
    "income_for_year",
    "peak_income",
    "Adjustment",
    "apply_adjustments",
    "default_adjustments",
    "income_declined",
    "starts_with_vowel",
]
