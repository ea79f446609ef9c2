"""FastAPI server — company import and funding listing.

Run with:
    uvicorn company_funding.api.server:app --reload --port 8000

Or:
    python -m company_funding.api.server

Endpoints:
    GET  /health            — liveness probe
    GET  /companies         — funding for every stored company (?starts_with=A)
    POST /companies/import  — import or replace the configured companies from EDGAR
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from company_funding.config.settings import AppSettings
from company_funding.ingest.edgar import EdgarClient
from company_funding.models.company import FundingResult
from company_funding.services import ImportSummary, import_companies, list_company_funding
from company_funding.store.sqlite import CompanyRepository

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send package logs to stderr at *level*."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


# ═══════════════════════════════════════════════════════════════════════════
# Dependencies
# ═══════════════════════════════════════════════════════════════════════════

@lru_cache
def get_settings() -> AppSettings:
    return AppSettings.from_env()


def get_repository(settings: AppSettings = Depends(get_settings)) -> CompanyRepository:
    return CompanyRepository(settings.storage.db_path)


def get_edgar_client(settings: AppSettings = Depends(get_settings)) -> Iterator[EdgarClient]:
    client = EdgarClient(settings.edgar)
    try:
        yield client
    finally:
        client.close()


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and make sure the schema exists."""
    settings = app.dependency_overrides.get(get_settings, get_settings)()
    configure_logging(settings.log_level)
    CompanyRepository(settings.storage.db_path).init_schema()
    logger.info("Database ready at %s", settings.storage.db_path)
    yield


app = FastAPI(
    title="Company Funding API",
    version="1.0",
    description=(
        "Imports annual net income from SEC EDGAR for a configured set of "
        "companies and reports the standard and special fundable amount "
        "for each one."
    ),
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("An unhandled exception occurred.")
    return JSONResponse(
        status_code=500,
        content={
            "message": "An unexpected error occurred. Please try again.",
            "details": str(exc),
        },
    )


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/companies", response_model=list[FundingResult], tags=["Companies"])
def list_companies(
    starts_with: str | None = Query(
        default=None,
        min_length=1,
        description="Case-insensitive name prefix, e.g. 'a' or 'App'.",
    ),
    repository: CompanyRepository = Depends(get_repository),
):
    """List the companies with their funding, optionally filtered by name prefix."""
    return list_company_funding(repository, starts_with)


@app.post("/companies/import", response_model=ImportSummary, tags=["Companies"])
def import_from_edgar(
    settings: AppSettings = Depends(get_settings),
    repository: CompanyRepository = Depends(get_repository),
    client: EdgarClient = Depends(get_edgar_client),
):
    """Import or replace the configured companies from SEC EDGAR."""
    return import_companies(client, repository, settings.ciks)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "company_funding.api.server:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
