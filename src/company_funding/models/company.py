"""Company types — the contract between ingest, store, engine, and API.

All money is ``Decimal``.  Amounts serialise to JSON numbers so API
clients see plain figures rather than quoted strings.
"""

from __future__ import annotations

from collections import Counter
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from company_funding.errors import DuplicateYearError

Amount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class IncomeRecord(BaseModel):
    """One company's net income for one fiscal year."""

    model_config = ConfigDict(frozen=True)

    year: int
    value: Amount
    """Signed. A negative value is a loss."""


class CompanyHistory(BaseModel):
    """Calculator input: identity plus the full income history.

    ``incomes`` is unordered.  At most one record per year is accepted;
    upstream code is responsible for deduplicating.
    """

    model_config = ConfigDict(frozen=True)

    id: int | str
    """Opaque identifier, passed through to the result."""
    name: str
    incomes: tuple[IncomeRecord, ...] = ()

    @field_validator("incomes")
    @classmethod
    def _unique_years(cls, incomes: tuple[IncomeRecord, ...]) -> tuple[IncomeRecord, ...]:
        counts = Counter(r.year for r in incomes)
        duplicated = sorted(year for year, n in counts.items() if n > 1)
        if duplicated:
            raise DuplicateYearError(duplicated)
        return incomes


class FundingResult(BaseModel):
    """Calculator output.

    ``special_fundable_amount`` is zero whenever ``standard_fundable_amount``
    is zero.
    """

    id: int | str
    name: str
    standard_fundable_amount: Amount = Field(ge=0)
    special_fundable_amount: Amount = Field(ge=0)
