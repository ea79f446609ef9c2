"""Funding errors — contract violations, never business outcomes.

An ineligible company is a normal result (both amounts zero).  These
exceptions signal caller bugs: inconsistent input that upstream code was
supposed to clean.
"""

from __future__ import annotations


class FundingError(Exception):
    """Base class for funding-calculation errors."""


class MissingRequiredYearError(FundingError, LookupError):
    """An income lookup hit a year that eligibility guarantees is present."""

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"Income data missing for required year {year}")


class DuplicateYearError(FundingError, ValueError):
    """Two income records claim the same year for one company."""

    def __init__(self, years: list[int]):
        self.years = years
        listed = ", ".join(str(y) for y in years)
        super().__init__(f"Duplicate income records for year(s): {listed}")
