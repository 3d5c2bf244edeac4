from .engine import (
    AgencyTier,
    CalculationResult,
    CalculatorInputs,
    CommitmentDuration,
    CommitmentType,
    ContractType,
    Discounts,
    InvalidConfiguration,
    MonthlyCalculation,
    MonthlyUsageData,
    SupportLevel,
    YearlySummary,
    aggregate_totals,
    aggregate_year,
    compute_projection,
    reconcile_month,
    resolve_discounts,
    schedule_frame,
    suggest_commitments,
    yearly_frame,
)
from .presets import CURRENCY_PRICING, TEMPLATES, VARIATION_PATTERNS, Currency, VariationPattern
from .usage import generate_monthly_usage, static_usage

__all__ = [
    "AgencyTier",
    "CalculationResult",
    "CalculatorInputs",
    "CommitmentDuration",
    "CommitmentType",
    "ContractType",
    "Currency",
    "CURRENCY_PRICING",
    "Discounts",
    "InvalidConfiguration",
    "MonthlyCalculation",
    "MonthlyUsageData",
    "SupportLevel",
    "TEMPLATES",
    "VARIATION_PATTERNS",
    "VariationPattern",
    "YearlySummary",
    "aggregate_totals",
    "aggregate_year",
    "compute_projection",
    "generate_monthly_usage",
    "reconcile_month",
    "resolve_discounts",
    "schedule_frame",
    "static_usage",
    "suggest_commitments",
    "yearly_frame",
]
