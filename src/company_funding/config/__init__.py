"""Configuration models — funding policy and runtime settings."""

from company_funding.config.policy import DEFAULT_POLICY, FundingPolicy
from company_funding.config.settings import AppSettings, EdgarConfig, StorageConfig

__all__ = [
    "DEFAULT_POLICY",
    "FundingPolicy",
    "AppSettings",
    "EdgarConfig",
    "StorageConfig",
]
