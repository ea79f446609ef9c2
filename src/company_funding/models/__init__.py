"""Data models — company histories, funding results, EDGAR payloads."""

from company_funding.models.company import (
    CompanyHistory,
    FundingResult,
    IncomeRecord,
)
from company_funding.models.edgar import EdgarCompanyFacts, IncomeFact

__all__ = [
    "CompanyHistory",
    "FundingResult",
    "IncomeRecord",
    "EdgarCompanyFacts",
    "IncomeFact",
]
