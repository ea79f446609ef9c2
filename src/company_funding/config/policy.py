"""Funding policy — eligibility window, rate tiers, and adjustments."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FundingPolicy(BaseModel):
    """Fixed eligibility and bonus/penalty policy.

    Defaults are the production constants.  ``compute_funding`` accepts an
    alternative instance so tests can probe edge cases, but every service
    and HTTP caller uses ``DEFAULT_POLICY``.
    """

    model_config = ConfigDict(frozen=True)

    # --- Eligibility window ---
    total_period_start: int = Field(
        default=2018,
        description="First year (inclusive) that must carry an income record.",
    )
    total_period_end: int = Field(
        default=2022,
        description="Last year (inclusive) that must carry an income record.",
    )
    positive_period_length: int = Field(
        default=2, ge=1,
        description="Number of most-recent years in the window whose income "
                    "must be strictly positive.",
    )

    # --- Rate tiers ---
    large_income_threshold: Decimal = Field(
        default=Decimal("10000000000"), gt=0,
        description="Peak income at or above this uses the large-income rate.",
    )
    large_income_rate: Decimal = Field(default=Decimal("0.1233"), gt=0)
    standard_income_rate: Decimal = Field(default=Decimal("0.2151"), gt=0)

    # --- Special-amount adjustments ---
    vowel_bonus_multiplier: Decimal = Field(
        default=Decimal("1.15"), gt=0,
        description="Applied when the company name starts with a vowel.",
    )
    decline_penalty_multiplier: Decimal = Field(
        default=Decimal("0.75"), gt=0,
        description="Applied when final-year income is below the prior year.",
    )

    @model_validator(mode="after")
    def _check_window(self) -> FundingPolicy:
        if self.total_period_start > self.total_period_end:
            raise ValueError(
                f"total_period_start ({self.total_period_start}) is after "
                f"total_period_end ({self.total_period_end})"
            )
        if self.positive_period_length > len(self.total_period_years):
            raise ValueError(
                f"positive_period_length ({self.positive_period_length}) exceeds "
                f"the {len(self.total_period_years)}-year total period"
            )
        return self

    @property
    def total_period_years(self) -> range:
        return range(self.total_period_start, self.total_period_end + 1)

    @property
    def positive_period_years(self) -> range:
        """The last ``positive_period_length`` years of the total period."""
        return range(
            self.total_period_end - self.positive_period_length + 1,
            self.total_period_end + 1,
        )


DEFAULT_POLICY = FundingPolicy()
