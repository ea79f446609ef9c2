"""Shared test fixtures — income histories for the documented scenarios."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from decimal import Decimal

import pytest

from company_funding.config import AppSettings, EdgarConfig, FundingPolicy, StorageConfig
from company_funding.models.company import CompanyHistory, IncomeRecord
from company_funding.store.sqlite import CompanyRepository

BILLION = Decimal("1000000000")

HistoryFactory = Callable[..., CompanyHistory]


def billions(**by_year: float) -> dict[int, Decimal]:
    """``billions(y2018=10, y2019=12)`` → ``{2018: 10e9, 2019: 12e9}``."""
    return {int(k[1:]): Decimal(str(v)) * BILLION for k, v in by_year.items()}


@pytest.fixture
def make_history() -> HistoryFactory:
    def _make(name: str = "Zebra Inc", incomes: dict[int, Decimal] | None = None, id: int | str = 1) -> CompanyHistory:
        return CompanyHistory(
            id=id,
            name=name,
            incomes=[IncomeRecord(year=y, value=v) for y, v in (incomes or {}).items()],
        )
    return _make


@pytest.fixture
def policy() -> FundingPolicy:
    return FundingPolicy()


@pytest.fixture
def growing_incomes() -> dict[int, Decimal]:
    """Scenario A — large, strictly growing income."""
    return billions(y2018=10, y2019=12, y2020=14, y2021=15, y2022=16)


@pytest.fixture
def declining_incomes() -> dict[int, Decimal]:
    """Scenario B — below threshold, declines in the final year."""
    return billions(y2018=5, y2019=6, y2020=7, y2021=8, y2022=7)


@pytest.fixture
def steady_incomes() -> dict[int, Decimal]:
    """Below threshold, no decline."""
    return billions(y2018=1, y2019=2, y2020=3, y2021=4, y2022=5)


@pytest.fixture
def memory_repository() -> CompanyRepository:
    conn = sqlite3.connect(":memory:")
    repo = CompanyRepository(":memory:", connection=conn)
    repo.init_schema()
    yield repo
    conn.close()


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        edgar=EdgarConfig(base_url="https://edgar.test/", max_parallelism=2),
        storage=StorageConfig(db_path=str(tmp_path / "companies.db")),
        ciks=["320193", "789019"],
    )


# ═══════════════════════════════════════════════════════════════════════════
# Fake EDGAR transport
# ═══════════════════════════════════════════════════════════════════════════

class FakeResponse:
    def __init__(self, status_code: int, payload: dict | None = None):
        self.status_code = status_code
        self._payload = payload or {}

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self, **kwargs):
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session``: URL → canned response."""

    def __init__(self, responses: dict[str, FakeResponse]):
        self.responses = responses
        self.headers: dict[str, str] = {}
        self.requested: list[str] = []
        self.closed = False

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.requested.append(url)
        return self.responses.get(url, FakeResponse(404))

    def close(self) -> None:
        self.closed = True


def company_facts(cik: int, name: str, usd: list[dict] | None) -> dict:
    """Minimal EDGAR company-facts document."""
    doc: dict = {"cik": cik, "entityName": name, "facts": {"us-gaap": {}}}
    if usd is not None:
        doc["facts"]["us-gaap"]["NetIncomeLoss"] = {"units": {"USD": usd}}
    return doc


def annual_facts(values: dict[int, int], form: str = "10-K") -> list[dict]:
    return [{"form": form, "frame": f"CY{year}", "val": val} for year, val in values.items()]
