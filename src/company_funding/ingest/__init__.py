"""Ingest — EDGAR company-facts acquisition."""

from company_funding.ingest.edgar import (
    EdgarClient,
    FetchOutcome,
    ImportedCompany,
    format_cik,
    normalize_company_facts,
)

__all__ = [
    "EdgarClient",
    "FetchOutcome",
    "ImportedCompany",
    "format_cik",
    "normalize_company_facts",
]
