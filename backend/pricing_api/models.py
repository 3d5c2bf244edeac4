from typing import List, Optional

from pydantic import BaseModel, Field, conint, confloat, field_validator

from pricing_engine import (
    TEMPLATES,
    AgencyTier,
    CommitmentDuration,
    CommitmentType,
    ContractType,
    Currency,
    SupportLevel,
    VariationPattern,
)


class PartnerConfigModel(BaseModel):
    agency_tier: AgencyTier = AgencyTier.GOLD
    contract_type: ContractType = ContractType.RESELLER
    commitment_type: CommitmentType = CommitmentType.MONTHLY
    commitment_duration: CommitmentDuration = CommitmentDuration.MONTHS_36
    support_level: SupportLevel = SupportLevel.ADVANCED
    free_user_licenses: conint(ge=0) = 0
    currency: Currency = Currency.USD


class CalculateRequest(PartnerConfigModel):
    average_monthly_cost: confloat(gt=0) = 1200.0
    template: Optional[str] = None
    variation_pattern: VariationPattern = VariationPattern.SUPER_STABLE
    enable_variations: bool = False
    seed: Optional[int] = 0

    # explicit 3 x 12 table of monthly totals; overrides the pattern generator
    monthly_usage: Optional[List[List[float]]] = None
    year_commitments: List[confloat(ge=0)] = Field(
        default_factory=lambda: [60000.0, 60000.0, 60000.0], min_length=3, max_length=3
    )

    round_decimals: conint(ge=0, le=4) = 2

    @field_validator("template")
    @classmethod
    def _known_template(cls, v):
        if v is not None and v not in TEMPLATES:
            raise ValueError(f"unknown template {v!r}")
        return v

    @field_validator("monthly_usage")
    @classmethod
    def _three_by_twelve(cls, v):
        if v is not None and (len(v) != 3 or any(len(row) != 12 for row in v)):
            raise ValueError("monthly_usage must be 3 rows of 12 months")
        return v


class DiscountsModel(BaseModel):
    reseller_discount: float
    commitment_discount: float
    commitment_bonus: float
    referral_year1: float
    referral_following: float


class ScheduleRow(BaseModel):
    year: int
    month: int
    base_usage: float
    cost_variation: float
    usage: float
    free_licenses: float
    support_discount: float
    reseller_discount: float
    usage_after_discount: float
    committed_amount: float
    cost_of_commitment_yearly: float
    cost_of_commitment_monthly: float
    true_up: float
    overage: float
    monthly_cost: float
    blended_discount: float


class YearlyRow(BaseModel):
    year: int
    total_usage: float
    total_usage_after_discount: float
    yearly_commitment: float
    total_true_up: float
    total_overage: float
    total_monthly_cost: float
    average_blended_discount: float


class TotalsModel(BaseModel):
    total_cost: float
    total_savings: float
    average_monthly_cost: float
    total_discount: float


class CalculateResponse(BaseModel):
    discounts: DiscountsModel
    totals: TotalsModel
    yearly: List[YearlyRow]
    schedule: List[ScheduleRow]


class SuggestResponse(BaseModel):
    current_commitments: List[float]
    suggested_commitments: List[int]
    projection: CalculateResponse
