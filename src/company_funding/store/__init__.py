"""Store — SQLite persistence of company income histories."""

from company_funding.store.sqlite import CompanyRepository

__all__ = ["CompanyRepository"]
