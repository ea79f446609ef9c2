"""Special-amount adjustments — ordered predicate → multiplier pairs.

Each adjustment inspects the company and, when its predicate holds,
scales the special amount.  Adjustments run left to right and only
when the amount is currently positive.  Multiplication commutes, so
order never changes the result; it is kept fixed for reproducible
rounding.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from company_funding.config.policy import FundingPolicy
from company_funding.engine.incomes import income_for_year
from company_funding.models.company import CompanyHistory

VOWELS = frozenset("aeiou")

Predicate = Callable[[CompanyHistory, dict[int, Decimal], FundingPolicy], bool]


@dataclass(frozen=True)
class Adjustment:
    """One named multiplier with the condition that triggers it."""

    name: str
    applies: Predicate
    multiplier: Decimal


def starts_with_vowel(name: str) -> bool:
    """ASCII case-insensitive test of the first character.  Empty → False."""
    return bool(name) and name[0].lower() in VOWELS


def income_declined(by_year: dict[int, Decimal], policy: FundingPolicy) -> bool:
    """Final-year income strictly below the year before it."""
    last = income_for_year(by_year, policy.total_period_end)
    previous = income_for_year(by_year, policy.total_period_end - 1)
    return last < previous


def default_adjustments(policy: FundingPolicy) -> list[Adjustment]:
    """Vowel bonus, then decline penalty."""
    return [
        Adjustment(
            name="vowel_bonus",
            applies=lambda history, by_year, p: starts_with_vowel(history.name),
            multiplier=policy.vowel_bonus_multiplier,
        ),
        Adjustment(
            name="decline_penalty",
            applies=lambda history, by_year, p: income_declined(by_year, p),
            multiplier=policy.decline_penalty_multiplier,
        ),
    ]


def apply_adjustments(
    amount: Decimal,
    history: CompanyHistory,
    by_year: dict[int, Decimal],
    policy: FundingPolicy,
    adjustments: Sequence[Adjustment] | None = None,
) -> Decimal:
    """Scale *amount* by every adjustment whose predicate holds.

    A non-positive amount is returned unchanged without evaluating any
    predicate.
    """
    if amount <= 0:
        return amount
    if adjustments is None:
        adjustments = default_adjustments(policy)

    for adjustment in adjustments:
        if adjustment.applies(history, by_year, policy):
            amount *= adjustment.multiplier
    return amount
