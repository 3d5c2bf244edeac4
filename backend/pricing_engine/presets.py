from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

# ---------- Currency price table ----------


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    CAD = "CAD"
    AUD = "AUD"


@dataclass(frozen=True)
class CurrencyPricing:
    symbol: str
    code: str
    license: float    # user licence, monthly
    advanced: float   # advanced support add-on, monthly
    total: float      # licence + advanced; the free-licence credit uses this


CURRENCY_PRICING: Dict[Currency, CurrencyPricing] = {
    Currency.USD: CurrencyPricing("$", "USD", 10.0, 9.0, 19.0),
    Currency.EUR: CurrencyPricing("€", "EUR", 10.0, 9.0, 19.0),
    Currency.GBP: CurrencyPricing("£", "GBP", 8.5, 7.5, 16.0),
    Currency.CAD: CurrencyPricing("C$", "CAD", 14.5, 13.0, 27.5),
    Currency.AUD: CurrencyPricing("A$", "AUD", 16.5, 15.0, 31.5),
}


def license_price(currency: Currency) -> float:
    return CURRENCY_PRICING[Currency(currency)].total


# ---------- Usage templates ----------


@dataclass(frozen=True)
class Template:
    id: str
    name: str
    description: str
    base_monthly_usage: float
    variability: float


TEMPLATES: Dict[str, Template] = {
    t.id: t
    for t in (
        Template("1-marketing-website", "1 Marketing Website",
                 "Single marketing website with moderate traffic", 1200.0, 0.1),
        Template("5-marketing-websites", "5 Marketing Websites",
                 "Multiple marketing sites for different brands", 5000.0, 0.15),
        Template("1-ecommerce-website", "1 E-commerce Website",
                 "Single online store with transactions", 2500.0, 0.2),
        Template("5-ecommerce-websites", "5 E-commerce Websites",
                 "Multiple online stores across different brands", 10000.0, 0.25),
        Template("small-agency", "Small Agency",
                 "10-15 client websites with mixed traffic", 8000.0, 0.2),
        Template("large-agency", "Large Agency",
                 "50+ client websites with high traffic", 18000.0, 0.3),
    )
}


# ---------- Variation patterns ----------


class VariationPattern(str, Enum):
    SUPER_STABLE = "super-stable"
    SEASONAL = "seasonal"
    HIGHLY_SEASONAL = "highly-seasonal"
    STEADY_GROWTH = "steady-growth"
    HIGHLY_VARIABLE = "highly-variable"


@dataclass(frozen=True)
class VariationPatternDef:
    id: VariationPattern
    name: str
    description: str
    variation_percentage: str
    variability: float = 0.0
    peak_months: Tuple[int, ...] = ()       # 0-based calendar months
    growth_rate: Optional[float] = None     # compound, per month


VARIATION_PATTERNS: Dict[VariationPattern, VariationPatternDef] = {
    VariationPattern.SUPER_STABLE: VariationPatternDef(
        VariationPattern.SUPER_STABLE, "Super Stable",
        "Very predictable usage with minimal variation", "<5%", variability=0.03,
    ),
    VariationPattern.SEASONAL: VariationPatternDef(
        VariationPattern.SEASONAL, "Seasonal",
        "4 months of higher costs (50-100% more)", "50-100%",
        variability=0.75, peak_months=(10, 11, 0, 1),
    ),
    VariationPattern.HIGHLY_SEASONAL: VariationPatternDef(
        VariationPattern.HIGHLY_SEASONAL, "Highly Seasonal",
        "5x peak for Mother's Day and Valentine's Day", "500%",
        variability=4.0, peak_months=(1, 4),
    ),
    VariationPattern.STEADY_GROWTH: VariationPatternDef(
        VariationPattern.STEADY_GROWTH, "Steady Growth",
        "Consistent 5% monthly growth", "+5%/month", growth_rate=0.05,
    ),
    VariationPattern.HIGHLY_VARIABLE: VariationPatternDef(
        VariationPattern.HIGHLY_VARIABLE, "Highly Variable",
        "Unpredictable ±30% variation", "±30%", variability=0.3,
    ),
}


def all_presets() -> Dict[str, List[dict]]:
    """Flat, JSON-friendly view of the currency, template and pattern tables."""
    return {
        "currencies": [
            {"code": p.code, "symbol": p.symbol, "license": p.license,
             "advanced": p.advanced, "total": p.total}
            for p in CURRENCY_PRICING.values()
        ],
        "templates": [
            {"id": t.id, "name": t.name, "description": t.description,
             "base_monthly_usage": t.base_monthly_usage, "variability": t.variability}
            for t in TEMPLATES.values()
        ],
        "variation_patterns": [
            {"id": p.id.value, "name": p.name, "description": p.description,
             "variation_percentage": p.variation_percentage}
            for p in VARIATION_PATTERNS.values()
        ],
    }
