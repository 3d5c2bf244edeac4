from typing import List, Optional, Sequence

import numpy as np

from .engine import MONTHS_PER_YEAR, YEARS, InvalidConfiguration, MonthlyUsageData, round_half_up
from .presets import VARIATION_PATTERNS, VariationPattern

UsageGrid = List[List[MonthlyUsageData]]


def static_usage(totals: Sequence[Sequence[float]]) -> UsageGrid:
    """Wrap a caller-entered 3 x 12 table of monthly totals (no variation split)."""
    if len(totals) != YEARS or any(len(y) != MONTHS_PER_YEAR for y in totals):
        raise InvalidConfiguration("monthly usage must be a 3 x 12 grid")
    return [[MonthlyUsageData(base_usage=float(v)) for v in year] for year in totals]


def _pattern_values(average: float, pattern: VariationPattern, rng: np.random.Generator) -> np.ndarray:
    p = VARIATION_PATTERNS[pattern]
    grid = np.full((YEARS, MONTHS_PER_YEAR), float(average))

    if p.growth_rate is not None:
        elapsed = np.arange(YEARS * MONTHS_PER_YEAR).reshape(YEARS, MONTHS_PER_YEAR)
        return average * (1 + p.growth_rate) ** elapsed

    if p.peak_months:
        # off-peak months give back the peak surplus so each year averages out
        n_peak = len(p.peak_months)
        off_peak = average - (n_peak * average * p.variability) / (MONTHS_PER_YEAR - n_peak)
        peak = np.isin(np.arange(MONTHS_PER_YEAR), p.peak_months)
        grid[:, peak] = average * (1 + p.variability)
        grid[:, ~peak] = off_peak
        return grid

    noise = rng.uniform(-p.variability, p.variability, size=grid.shape)
    return average * (1 + noise)


def generate_monthly_usage(
    average_monthly_cost: float,
    pattern: VariationPattern = VariationPattern.SUPER_STABLE,
    enable_variations: bool = True,
    seed: Optional[int] = None,
) -> UsageGrid:
    """36 months of usage anchored on ``average_monthly_cost``.

    base_usage is always the anchor; variation is the pattern's deviation from
    it, rounded to whole currency units. With variations disabled every month
    is the flat anchor. Random patterns are reproducible for a given seed.
    """
    try:
        pattern = VariationPattern(pattern)
    except ValueError:
        raise InvalidConfiguration(f"unknown variation pattern {pattern!r}") from None

    average = float(average_monthly_cost)
    if not enable_variations:
        return [[MonthlyUsageData(base_usage=average) for _ in range(MONTHS_PER_YEAR)]
                for _ in range(YEARS)]

    values = _pattern_values(average, pattern, np.random.default_rng(seed))
    return [
        [MonthlyUsageData(base_usage=average, variation=round_half_up(v) - average) for v in row]
        for row in values.tolist()
    ]
