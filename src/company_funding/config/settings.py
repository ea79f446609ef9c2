"""Runtime settings — EDGAR access, storage, and logging."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

ENV_PREFIX = "COMPANY_FUNDING_"
ENV_KEYS = (
    "EDGAR_BASE_URL",
    "USER_AGENT",
    "MAX_PARALLELISM",
    "TIMEOUT_S",
    "DB_PATH",
    "CIKS",
    "LOG_LEVEL",
)


def _default_parallelism() -> int:
    return os.cpu_count() or 4


class EdgarConfig(BaseModel):
    """How to reach SEC EDGAR's company-facts API."""

    base_url: str = Field(
        default="https://data.sec.gov/",
        description="EDGAR API root.  Must end with '/'.",
    )
    user_agent: str = Field(
        default="PostmanRuntime/7.51.0",
        description="EDGAR rejects requests without a User-Agent header.",
    )
    valid_form: str = Field(
        default="10-K",
        description="Only facts reported on this form are imported.",
    )
    max_parallelism: int = Field(
        default_factory=_default_parallelism, ge=1,
        description="Upper bound on concurrent company-facts requests.",
    )
    timeout_s: float = Field(default=30.0, gt=0, description="Per-request timeout (seconds)")


class StorageConfig(BaseModel):
    """SQLite location."""

    db_path: str = Field(default="./data/companies.db")


class AppSettings(BaseModel):
    """Everything the service layer and HTTP surface need at runtime."""

    edgar: EdgarConfig = Field(default_factory=EdgarConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ciks: list[str] = Field(
        default_factory=list,
        description="Central Index Keys imported by POST /companies/import.",
    )
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> AppSettings:
        """Build settings from ``COMPANY_FUNDING_*`` environment variables.

        Unset or empty variables fall back to the model defaults.
        """
        env = os.environ if environ is None else environ
        values = {
            key: env[ENV_PREFIX + key]
            for key in ENV_KEYS
            if env.get(ENV_PREFIX + key)
        }

        edgar: dict[str, object] = {}
        if "EDGAR_BASE_URL" in values:
            base_url = values["EDGAR_BASE_URL"]
            edgar["base_url"] = base_url if base_url.endswith("/") else base_url + "/"
        if "USER_AGENT" in values:
            edgar["user_agent"] = values["USER_AGENT"]
        if "MAX_PARALLELISM" in values:
            edgar["max_parallelism"] = values["MAX_PARALLELISM"]
        if "TIMEOUT_S" in values:
            edgar["timeout_s"] = values["TIMEOUT_S"]

        storage: dict[str, object] = {}
        if "DB_PATH" in values:
            storage["db_path"] = values["DB_PATH"]

        data: dict[str, object] = {
            "edgar": EdgarConfig(**edgar),
            "storage": StorageConfig(**storage),
        }
        if "CIKS" in values:
            data["ciks"] = [c.strip() for c in values["CIKS"].split(",") if c.strip()]
        if "LOG_LEVEL" in values:
            data["log_level"] = values["LOG_LEVEL"].upper()
        return cls(**data)
