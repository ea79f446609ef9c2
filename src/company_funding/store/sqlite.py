"""SQLite persistence — companies and their annual income histories.

Income values are stored as TEXT so ``Decimal`` precision survives a
round trip.  ``replace_all`` is the only writer and runs in one
transaction: readers see either the previous dataset or the new one.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from decimal import Decimal
from pathlib import Path
from typing import Any

from company_funding.ingest.edgar import ImportedCompany
from company_funding.models.company import CompanyHistory, IncomeRecord

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS companies (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    cik         INTEGER NOT NULL,
    entity_name TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS company_incomes (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    company_id INTEGER NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
    year       INTEGER NOT NULL,
    value      TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_company_incomes_company_id
    ON company_incomes(company_id);
"""


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def _like_prefix(prefix: str) -> str:
    escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.upper() + "%"


class CompanyRepository:
    """Company + income storage.

    Pass ``connection`` to share one connection (e.g. an in-memory
    database in tests); otherwise each call opens and closes its own.
    """

    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self._external_conn = connection
        if connection is not None:
            connection.row_factory = dict_factory

    def _get_conn(self) -> sqlite3.Connection:
        if self._external_conn is not None:
            return self._external_conn

        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _should_close(self) -> bool:
        return self._external_conn is None

    def init_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.executescript(SCHEMA)
        finally:
            if self._should_close():
                conn.close()

    def replace_all(self, companies: Iterable[ImportedCompany]) -> int:
        """Delete every stored company and insert *companies*, atomically.

        Returns the number of companies inserted.  On any error the
        transaction is rolled back and the previous dataset is kept.
        """
        conn = self._get_conn()
        count = 0
        try:
            with conn:
                conn.execute("DELETE FROM company_incomes")
                conn.execute("DELETE FROM companies")
                for company in companies:
                    cursor = conn.execute(
                        "INSERT INTO companies (cik, entity_name) VALUES (?, ?)",
                        (company.cik, company.entity_name),
                    )
                    conn.executemany(
                        "INSERT INTO company_incomes (company_id, year, value) VALUES (?, ?, ?)",
                        [(cursor.lastrowid, r.year, str(r.value)) for r in company.incomes],
                    )
                    count += 1
        finally:
            if self._should_close():
                conn.close()
        logger.info("Stored %d companies", count)
        return count

    def list_histories(self, name_prefix: str | None = None) -> list[CompanyHistory]:
        """Stored companies ordered by id, optionally filtered by a
        case-insensitive name prefix."""
        conn = self._get_conn()
        try:
            if name_prefix:
                companies = conn.execute(
                    "SELECT id, entity_name FROM companies "
                    "WHERE UPPER(entity_name) LIKE ? ESCAPE '\\' ORDER BY id",
                    (_like_prefix(name_prefix),),
                ).fetchall()
            else:
                companies = conn.execute(
                    "SELECT id, entity_name FROM companies ORDER BY id"
                ).fetchall()

            incomes: dict[int, list[IncomeRecord]] = {c["id"]: [] for c in companies}
            if incomes:
                placeholders = ",".join("?" for _ in incomes)
                rows = conn.execute(
                    f"SELECT company_id, year, value FROM company_incomes "
                    f"WHERE company_id IN ({placeholders}) ORDER BY company_id, year",
                    tuple(incomes),
                ).fetchall()
                for row in rows:
                    incomes[row["company_id"]].append(
                        IncomeRecord(year=row["year"], value=Decimal(row["value"]))
                    )
        finally:
            if self._should_close():
                conn.close()

        return [
            CompanyHistory(id=c["id"], name=c["entity_name"], incomes=incomes[c["id"]])
            for c in companies
        ]
