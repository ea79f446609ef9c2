"""Year lookups over one company's income history.

The history is turned into a ``{year: value}`` mapping once per
calculation; every other step reads from that mapping.
"""

from __future__ import annotations

from decimal import Decimal

from company_funding.errors import MissingRequiredYearError
from company_funding.models.company import CompanyHistory


def incomes_by_year(history: CompanyHistory) -> dict[int, Decimal]:
    """Map each reported year to its income value.

    ``CompanyHistory`` already guarantees one record per year.
    """
    return {record.year: record.value for record in history.incomes}


def income_for_year(by_year: dict[int, Decimal], year: int) -> Decimal:
    """Income for *year*.

    Raises
    ------
    MissingRequiredYearError
        If the year is absent.  Callers only ask for years the eligibility
        check has already confirmed, so absence is a bug, not a zero.
    """
    try:
        return by_year[year]
    except KeyError:
        raise MissingRequiredYearError(year) from None


def peak_income(by_year: dict[int, Decimal], years: range) -> Decimal:
    """Highest income among *years*.

    Raises ``MissingRequiredYearError`` for the first year of the range
    when none of the years is present.
    """
    values = [by_year[y] for y in years if y in by_year]
    if not values:
        raise MissingRequiredYearError(years.start)
    return max(values)
