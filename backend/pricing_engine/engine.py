import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple, Type, TypeVar

import pandas as pd

from .presets import Currency, license_price

logger = logging.getLogger(__name__)

YEARS = 3
MONTHS_PER_YEAR = 12


class InvalidConfiguration(ValueError):
    """A categorical input outside its allowed set, or a malformed usage grid."""


# ---------- Partner configuration (closed variants) ----------


class AgencyTier(str, Enum):
    REGISTERED = "Registered"
    GOLD = "Gold"
    PLATINUM = "Platinum"
    DIAMOND = "Diamond"


class ContractType(str, Enum):
    DIRECT = "Direct"
    RESELLER = "Reseller"


class CommitmentType(str, Enum):
    MONTHLY = "Monthly Spending"
    ANNUAL = "Annual Spending"


class CommitmentDuration(str, Enum):
    MONTHS_12 = "12 months"
    MONTHS_24 = "24 months"
    MONTHS_36 = "36 months"


class SupportLevel(str, Enum):
    NONE = "No Support"
    ADVANCED = "Advanced Support"
    PREMIUM = "Premium Support"


E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: Type[E], value, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        raise InvalidConfiguration(
            f"{field_name}={value!r} is not one of {allowed}"
        ) from None


# ---------- Data models (dataclasses, internal) ----------


@dataclass(frozen=True)
class CalculatorInputs:
    agency_tier: AgencyTier = AgencyTier.GOLD
    contract_type: ContractType = ContractType.RESELLER
    commitment_type: CommitmentType = CommitmentType.MONTHLY
    commitment_duration: CommitmentDuration = CommitmentDuration.MONTHS_36
    support_level: SupportLevel = SupportLevel.NONE
    free_user_licenses: int = 0
    currency: Currency = Currency.USD
    average_monthly_cost: float = 1200.0

    def __post_init__(self):
        # accept raw strings from callers, store the closed variants
        for name, enum_cls in (
            ("agency_tier", AgencyTier),
            ("contract_type", ContractType),
            ("commitment_type", CommitmentType),
            ("commitment_duration", CommitmentDuration),
            ("support_level", SupportLevel),
            ("currency", Currency),
        ):
            object.__setattr__(self, name, _coerce(enum_cls, getattr(self, name), name))


@dataclass(frozen=True)
class Discounts:
    reseller_discount: float = 0.0
    commitment_discount: float = 0.0
    commitment_bonus: float = 0.0
    referral_year1: float = 0.0
    referral_following: float = 0.0


@dataclass(frozen=True)
class MonthlyUsageData:
    base_usage: float
    variation: float = 0.0

    @property
    def total_usage(self) -> float:
        return self.base_usage + self.variation


@dataclass(frozen=True)
class MonthlyCalculation:
    month: int
    year: int
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


@dataclass(frozen=True)
class YearlySummary:
    year: int
    total_usage: float
    total_usage_after_discount: float
    total_true_up: float
    total_overage: float
    total_monthly_cost: float
    average_blended_discount: float
    yearly_commitment: float


@dataclass(frozen=True)
class CalculationResult:
    monthly_calculations: Tuple[MonthlyCalculation, ...]
    yearly_summaries: Tuple[YearlySummary, ...]
    discounts: Discounts
    total_cost: float
    total_savings: float
    average_monthly_cost: float
    total_discount: float


# ---------- Rate tables ----------

_COMMITMENT_DISCOUNTS: Dict[Tuple[CommitmentType, CommitmentDuration], float] = {
    (CommitmentType.MONTHLY, CommitmentDuration.MONTHS_12): 0.10,
    (CommitmentType.MONTHLY, CommitmentDuration.MONTHS_24): 0.15,
    (CommitmentType.MONTHLY, CommitmentDuration.MONTHS_36): 0.20,
    (CommitmentType.ANNUAL, CommitmentDuration.MONTHS_12): 0.05,
    (CommitmentType.ANNUAL, CommitmentDuration.MONTHS_24): 0.10,
    (CommitmentType.ANNUAL, CommitmentDuration.MONTHS_36): 0.15,
}

# reseller + monthly spending only
_COMMITMENT_BONUS: Dict[AgencyTier, float] = {
    AgencyTier.REGISTERED: 0.0,
    AgencyTier.GOLD: 0.05,
    AgencyTier.PLATINUM: 0.07,
    AgencyTier.DIAMOND: 0.07,
}

_REFERRAL_FOLLOWING: Dict[AgencyTier, float] = {
    AgencyTier.REGISTERED: 0.0,
    AgencyTier.GOLD: 0.02,
    AgencyTier.PLATINUM: 0.035,
    AgencyTier.DIAMOND: 0.05,
}

_SUPPORT_RATES: Dict[SupportLevel, float] = {
    SupportLevel.NONE: 0.0,
    SupportLevel.ADVANCED: 0.05,
    SupportLevel.PREMIUM: 0.04,
}

RESELLER_RATE = 0.10
REFERRAL_YEAR1_RATE = 0.10


# ---------- Helpers ----------


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _safe_ratio(num: float, den: float) -> float:
    return num / den if den != 0 else 0.0


# ---------- Core calculations ----------


def resolve_discounts(inputs: CalculatorInputs) -> Discounts:
    tier = _coerce(AgencyTier, inputs.agency_tier, "agency_tier")
    contract = _coerce(ContractType, inputs.contract_type, "contract_type")
    ctype = _coerce(CommitmentType, inputs.commitment_type, "commitment_type")
    duration = _coerce(CommitmentDuration, inputs.commitment_duration, "commitment_duration")

    is_reseller = contract is ContractType.RESELLER
    partner = tier is not AgencyTier.REGISTERED

    bonus = 0.0
    if is_reseller and ctype is CommitmentType.MONTHLY:
        bonus = _COMMITMENT_BONUS[tier]

    return Discounts(
        reseller_discount=RESELLER_RATE if (is_reseller and partner) else 0.0,
        commitment_discount=_COMMITMENT_DISCOUNTS[(ctype, duration)],
        commitment_bonus=bonus,
        referral_year1=REFERRAL_YEAR1_RATE if partner else 0.0,
        referral_following=_REFERRAL_FOLLOWING[tier],
    )


def reconcile_month(
    usage: MonthlyUsageData,
    discounts: Discounts,
    yearly_commitment: float,
    license_credit: float,
    support_level: SupportLevel,
    *,
    month: int = 0,
    year: int = 0,
) -> MonthlyCalculation:
    """One month of commitment vs. usage.

    ``license_credit`` is per-licence price x free licence count; it is applied
    as a flat negative amount regardless of usage. Unused commitment (true-up)
    is forfeited, the prepaid commitment cost is charged every month.
    """
    support = _coerce(SupportLevel, support_level, "support_level")
    gross = usage.total_usage

    free_licenses = -license_credit
    support_discount = -gross * _SUPPORT_RATES[support]
    reseller_amount = -discounts.reseller_discount * gross
    after_discount = gross + free_licenses + support_discount + reseller_amount

    committed_monthly = yearly_commitment / MONTHS_PER_YEAR
    cost_of_commitment = yearly_commitment * (
        1 - (discounts.commitment_discount + discounts.commitment_bonus)
    )
    monthly_commitment_cost = cost_of_commitment / MONTHS_PER_YEAR

    true_up = max(0.0, committed_monthly - after_discount)
    overage = max(0.0, after_discount - committed_monthly)
    monthly_cost = monthly_commitment_cost + overage

    return MonthlyCalculation(
        month=month,
        year=year,
        base_usage=usage.base_usage,
        cost_variation=usage.variation,
        usage=gross,
        free_licenses=free_licenses,
        support_discount=support_discount,
        reseller_discount=reseller_amount,
        usage_after_discount=after_discount,
        committed_amount=committed_monthly,
        cost_of_commitment_yearly=cost_of_commitment,
        cost_of_commitment_monthly=monthly_commitment_cost,
        true_up=true_up,
        overage=overage,
        monthly_cost=monthly_cost,
        blended_discount=_safe_ratio(monthly_cost - gross, gross),
    )


def aggregate_year(
    months: Sequence[MonthlyCalculation], yearly_commitment: float, year: int = 0
) -> YearlySummary:
    if len(months) != MONTHS_PER_YEAR:
        raise InvalidConfiguration(f"expected 12 months, got {len(months)}")
    total_usage = sum(m.usage for m in months)
    total_cost = sum(m.monthly_cost for m in months)
    return YearlySummary(
        year=year or months[0].year,
        total_usage=total_usage,
        total_usage_after_discount=sum(m.usage_after_discount for m in months),
        total_true_up=sum(m.true_up for m in months),
        total_overage=sum(m.overage for m in months),
        total_monthly_cost=total_cost,
        average_blended_discount=_safe_ratio(total_cost - total_usage, total_usage),
        yearly_commitment=yearly_commitment,
    )


def aggregate_totals(summaries: Sequence[YearlySummary]) -> Tuple[float, float]:
    """(total_cost, total_savings); savings are measured against gross usage."""
    total_cost = sum(y.total_monthly_cost for y in summaries)
    total_savings = sum(y.total_usage for y in summaries) - total_cost
    return total_cost, total_savings


def _check_grid(monthly_usage, year_commitments) -> None:
    if len(year_commitments) != YEARS:
        raise InvalidConfiguration(f"expected 3 yearly commitments, got {len(year_commitments)}")
    if len(monthly_usage) != YEARS or any(len(y) != MONTHS_PER_YEAR for y in monthly_usage):
        raise InvalidConfiguration("monthly usage must be a 3 x 12 grid")


def compute_projection(
    inputs: CalculatorInputs,
    monthly_usage: Sequence[Sequence[MonthlyUsageData]],
    year_commitments: Sequence[float],
) -> CalculationResult:
    _check_grid(monthly_usage, year_commitments)
    discounts = resolve_discounts(inputs)
    license_credit = license_price(inputs.currency) * inputs.free_user_licenses

    monthly: List[MonthlyCalculation] = []
    yearly: List[YearlySummary] = []
    for y in range(YEARS):
        commitment = float(year_commitments[y])
        months = [
            reconcile_month(
                monthly_usage[y][m], discounts, commitment, license_credit,
                inputs.support_level, month=m + 1, year=y + 1,
            )
            for m in range(MONTHS_PER_YEAR)
        ]
        monthly.extend(months)
        yearly.append(aggregate_year(months, commitment, year=y + 1))

    total_cost, total_savings = aggregate_totals(yearly)
    gross = sum(s.total_usage for s in yearly)
    result = CalculationResult(
        monthly_calculations=tuple(monthly),
        yearly_summaries=tuple(yearly),
        discounts=discounts,
        total_cost=total_cost,
        total_savings=total_savings,
        average_monthly_cost=total_cost / (YEARS * MONTHS_PER_YEAR),
        total_discount=_safe_ratio(gross - total_cost, gross),
    )
    logger.debug(
        "projection tier=%s contract=%s total_cost=%.2f total_savings=%.2f",
        inputs.agency_tier.value, inputs.contract_type.value, total_cost, total_savings,
    )
    return result


def suggest_commitments(result: CalculationResult) -> Tuple[int, int, int]:
    """Per year: average post-discount usage x 12, rounded half-up. No safety margin."""
    out = []
    for y in range(1, YEARS + 1):
        months = [m for m in result.monthly_calculations if m.year == y]
        avg = sum(m.usage_after_discount for m in months) / MONTHS_PER_YEAR
        out.append(round_half_up(avg * MONTHS_PER_YEAR))
    return tuple(out)


# ---------- Tabular views ----------

SCHEDULE_COLUMNS: Dict[str, str] = {
    "year": "Year",
    "month": "Month",
    "base_usage": "Base Usage",
    "cost_variation": "Cost Variation",
    "usage": "Usage (List Price)",
    "free_licenses": "Free Licenses",
    "support_discount": "Support Discount",
    "reseller_discount": "Reseller Discount",
    "usage_after_discount": "Usage After Discount",
    "committed_amount": "Committed Amount",
    "cost_of_commitment_yearly": "Commitment Cost (Yearly)",
    "cost_of_commitment_monthly": "Commitment Cost (Monthly)",
    "true_up": "True Up",
    "overage": "Overage",
    "monthly_cost": "Monthly Cost",
    "blended_discount": "Blended Discount",
}

YEARLY_COLUMNS: Dict[str, str] = {
    "year": "Year",
    "total_usage": "Total Usage",
    "total_usage_after_discount": "Usage After Discount",
    "yearly_commitment": "Yearly Commitment",
    "total_true_up": "True Up",
    "total_overage": "Overage",
    "total_monthly_cost": "Total Cost",
    "average_blended_discount": "Avg Blended Discount",
}


def schedule_frame(result: CalculationResult) -> pd.DataFrame:
    rows = [{label: getattr(m, attr) for attr, label in SCHEDULE_COLUMNS.items()}
            for m in result.monthly_calculations]
    return pd.DataFrame(rows, columns=list(SCHEDULE_COLUMNS.values()))


def yearly_frame(result: CalculationResult) -> pd.DataFrame:
    rows = [{label: getattr(s, attr) for attr, label in YEARLY_COLUMNS.items()}
            for s in result.yearly_summaries]
    return pd.DataFrame(rows, columns=list(YEARLY_COLUMNS.values()))
