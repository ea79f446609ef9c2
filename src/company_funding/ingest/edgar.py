"""EDGAR acquisition — fetch company facts and normalise income histories.

Pipeline per CIK:
  GET api/xbrl/companyfacts/CIK##########.json
  → keep NetIncomeLoss USD facts filed on a 10-K with an annual frame (CY2021)
  → one ``IncomeRecord`` per year (last-seen wins on duplicates)

Fetching runs on a thread pool bounded by ``EdgarConfig.max_parallelism``.
A non-2xx response skips that company with a warning; transport errors
propagate so a broken import never reaches storage.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import requests

from company_funding.config.settings import EdgarConfig
from company_funding.models.company import IncomeRecord
from company_funding.models.edgar import EdgarCompanyFacts

logger = logging.getLogger(__name__)

ANNUAL_FRAME = re.compile(r"^CY\d{4}$")
COMPANY_FACTS_PATH = "api/xbrl/companyfacts/CIK{cik}.json"


@dataclass(frozen=True)
class ImportedCompany:
    """One company as delivered by EDGAR, ready for storage."""

    cik: int
    entity_name: str
    incomes: list[IncomeRecord] = field(default_factory=list)


@dataclass
class FetchOutcome:
    """Companies fetched, plus the CIKs EDGAR did not serve."""

    companies: list[ImportedCompany] = field(default_factory=list)
    skipped_ciks: list[str] = field(default_factory=list)


def format_cik(cik: str | int) -> str:
    """Zero-pad a CIK to the 10 digits EDGAR expects."""
    return str(cik).strip().zfill(10)


def normalize_company_facts(
    facts: EdgarCompanyFacts,
    valid_form: str = "10-K",
) -> ImportedCompany:
    """Reduce an EDGAR document to one income record per annual frame."""
    by_year: dict[int, Decimal] = {}
    for fact in facts.income_facts():
        if fact.form != valid_form or not ANNUAL_FRAME.match(fact.frame or ""):
            continue
        year = int(fact.frame[-4:])
        if year in by_year:
            logger.warning(
                "CIK %s reports %s twice; keeping the later value",
                format_cik(facts.cik), fact.frame,
            )
        by_year[year] = fact.val

    return ImportedCompany(
        cik=facts.cik,
        entity_name=facts.entity_name,
        incomes=[IncomeRecord(year=y, value=v) for y, v in sorted(by_year.items())],
    )


class EdgarClient:
    """Thin ``requests`` wrapper around the company-facts endpoint."""

    def __init__(self, config: EdgarConfig, session: Any | None = None):
        self.config = config
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "User-Agent": config.user_agent,
            "Accept": "*/*",
        })

    def fetch_company_facts(self, cik: str | int) -> EdgarCompanyFacts | None:
        """Fetch one company's facts document.

        Returns ``None`` (and logs) when EDGAR answers with a non-2xx status.
        """
        padded = format_cik(cik)
        url = self.config.base_url + COMPANY_FACTS_PATH.format(cik=padded)
        response = self.session.get(url, timeout=self.config.timeout_s)
        if not response.ok:
            logger.warning(
                "Failed to fetch data for CIK %s. Status Code: %s",
                padded, response.status_code,
            )
            return None
        return EdgarCompanyFacts.model_validate(response.json(parse_float=Decimal))

    def fetch_company(self, cik: str | int) -> ImportedCompany | None:
        facts = self.fetch_company_facts(cik)
        if facts is None:
            return None
        return normalize_company_facts(facts, self.config.valid_form)

    def fetch_companies(self, ciks: list[str]) -> FetchOutcome:
        """Fetch every CIK with at most ``max_parallelism`` requests in flight.

        Output order follows *ciks*.  Any transport error is re-raised once
        the pool has shut down.
        """
        outcome = FetchOutcome()
        if not ciks:
            return outcome

        workers = min(self.config.max_parallelism, len(ciks))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            fetched = list(pool.map(self.fetch_company, ciks))

        for cik, company in zip(ciks, fetched):
            if company is None:
                outcome.skipped_ciks.append(cik)
            else:
                outcome.companies.append(company)
        return outcome

    def close(self) -> None:
        self.session.close()
