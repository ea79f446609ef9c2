"""EDGAR company-facts document — only the branch we read.

Shape of ``api/xbrl/companyfacts/CIK##########.json``::

    {
      "cik": 320193,
      "entityName": "Apple Inc.",
      "facts": {
        "us-gaap": {
          "NetIncomeLoss": {
            "units": {
              "USD": [{"form": "10-K", "frame": "CY2021", "val": 94680000000}, ...]
            }
          }
        }
      }
    }

Every level below ``facts`` is optional in practice; absent levels mean
"no income data" and are modelled as ``None``.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class _EdgarModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class IncomeFact(_EdgarModel):
    """One reported NetIncomeLoss value.

    ``form`` is the filing type (10-K, 10-Q, 8-K, 20-F, ...).  ``frame`` is
    set for facts EDGAR aligned to a calendar period: ``CY2021`` for a year,
    ``CY2021Q3`` for a quarter.
    """

    form: str = ""
    frame: str | None = None
    val: Decimal


class IncomeUnits(_EdgarModel):
    usd: list[IncomeFact] | None = Field(default=None, alias="USD")


class IncomeConcept(_EdgarModel):
    units: IncomeUnits | None = None


class UsGaapFacts(_EdgarModel):
    net_income_loss: IncomeConcept | None = Field(default=None, alias="NetIncomeLoss")


class Facts(_EdgarModel):
    us_gaap: UsGaapFacts | None = Field(default=None, alias="us-gaap")


class EdgarCompanyFacts(_EdgarModel):
    cik: int
    entity_name: str = Field(alias="entityName")
    facts: Facts | None = None

    def income_facts(self) -> list[IncomeFact]:
        """All NetIncomeLoss USD facts, or ``[]`` when any level is absent."""
        if (
            self.facts is None
            or self.facts.us_gaap is None
            or self.facts.us_gaap.net_income_loss is None
            or self.facts.us_gaap.net_income_loss.units is None
            or self.facts.us_gaap.net_income_loss.units.usd is None
        ):
            return []
        return list(self.facts.us_gaap.net_income_loss.units.usd)
