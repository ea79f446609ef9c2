"""Use-cases behind the HTTP surface: import from EDGAR, list with funding."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from company_funding.config.policy import DEFAULT_POLICY
from company_funding.engine.funding import compute_funding
from company_funding.ingest.edgar import EdgarClient
from company_funding.models.company import FundingResult
from company_funding.store.sqlite import CompanyRepository

logger = logging.getLogger(__name__)


class ImportSummary(BaseModel):
    """What an import run did."""

    requested: int = Field(description="CIKs configured for import")
    imported: int = Field(description="Companies stored")
    skipped_ciks: list[str] = Field(
        default_factory=list,
        description="CIKs EDGAR answered with a non-2xx status",
    )


def import_companies(
    client: EdgarClient,
    repository: CompanyRepository,
    ciks: list[str],
) -> ImportSummary:
    """Fetch every configured company, then replace the stored dataset.

    Fetching finishes before storage is touched, and the replace runs in
    one transaction, so a failure at any point leaves the previous
    dataset intact.
    """
    logger.info("Importing %d companies from EDGAR", len(ciks))
    outcome = client.fetch_companies(ciks)
    imported = repository.replace_all(outcome.companies)
    if outcome.skipped_ciks:
        logger.warning("Skipped %d CIKs: %s", len(outcome.skipped_ciks), ", ".join(outcome.skipped_ciks))
    logger.info("Import finished: %d stored, %d skipped", imported, len(outcome.skipped_ciks))
    return ImportSummary(
        requested=len(ciks),
        imported=imported,
        skipped_ciks=outcome.skipped_ciks,
    )


def list_company_funding(
    repository: CompanyRepository,
    starts_with: str | None = None,
) -> list[FundingResult]:
    """Funding for every stored company, optionally filtered by name prefix."""
    histories = repository.list_histories(starts_with)
    return [compute_funding(history, DEFAULT_POLICY) for history in histories]
