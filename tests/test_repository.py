"""Tests for store/sqlite.py — replace-all atomicity and prefix filtering."""

from __future__ import annotations

from decimal import Decimal

import pytest

from company_funding.ingest.edgar import ImportedCompany
from company_funding.models.company import IncomeRecord
from company_funding.store.sqlite import CompanyRepository


def _company(cik: int, name: str, values: dict[int, str] | None = None) -> ImportedCompany:
    return ImportedCompany(
        cik=cik,
        entity_name=name,
        incomes=[IncomeRecord(year=y, value=Decimal(v)) for y, v in (values or {}).items()],
    )


def test_round_trip_preserves_decimals(memory_repository):
    memory_repository.replace_all([_company(1, "Apple Inc.", {2021: "94680000000.55", 2022: "-0.01"})])
    [history] = memory_repository.list_histories()
    assert history.name == "Apple Inc."
    assert {r.year: r.value for r in history.incomes} == {
        2021: Decimal("94680000000.55"),
        2022: Decimal("-0.01"),
    }


def test_replace_all_discards_previous(memory_repository):
    memory_repository.replace_all([_company(1, "Old Co", {2020: "1"})])
    count = memory_repository.replace_all([_company(2, "New Co"), _company(3, "Newer Co")])
    assert count == 2
    assert [h.name for h in memory_repository.list_histories()] == ["New Co", "Newer Co"]


def test_failed_replace_keeps_previous_dataset(memory_repository):
    memory_repository.replace_all([_company(1, "Kept Co", {2020: "1"})])

    def exploding():
        yield _company(2, "Half Co", {2021: "2"})
        raise RuntimeError("fetch died mid-import")

    with pytest.raises(RuntimeError):
        memory_repository.replace_all(exploding())

    histories = memory_repository.list_histories()
    assert [h.name for h in histories] == ["Kept Co"]
    assert [r.year for r in histories[0].incomes] == [2020]


@pytest.mark.parametrize("prefix, expected", [
    ("a", ["Apple Inc.", "amazon.com"]),
    ("A", ["Apple Inc.", "amazon.com"]),
    ("app", ["Apple Inc."]),
    ("x", []),
    (None, ["Apple Inc.", "Microsoft", "amazon.com", "100% Co"]),
])
def test_prefix_filter(memory_repository, prefix, expected):
    memory_repository.replace_all([
        _company(1, "Apple Inc."),
        _company(2, "Microsoft"),
        _company(3, "amazon.com"),
        _company(4, "100% Co"),
    ])
    assert [h.name for h in memory_repository.list_histories(prefix)] == expected


def test_like_wildcards_are_literal(memory_repository):
    memory_repository.replace_all([
        _company(1, "100% Co"),
        _company(2, "1000 Corp"),
        _company(3, "A_B Corp"),
        _company(4, "AXB Corp"),
    ])
    assert [h.name for h in memory_repository.list_histories("100%")] == ["100% Co"]
    assert [h.name for h in memory_repository.list_histories("A_")] == ["A_B Corp"]


def test_ids_are_passed_to_histories(memory_repository):
    memory_repository.replace_all([_company(320193, "Apple Inc."), _company(789019, "Microsoft")])
    ids = [h.id for h in memory_repository.list_histories()]
    assert len(set(ids)) == 2
    assert all(isinstance(i, int) for i in ids)


def test_file_backed_repository(tmp_path):
    repo = CompanyRepository(str(tmp_path / "nested" / "companies.db"))
    repo.init_schema()
    repo.replace_all([_company(1, "Apple Inc.", {2022: "5"})])
    [history] = CompanyRepository(repo.db_path).list_histories("apple")
    assert history.incomes[0].value == Decimal(5)
