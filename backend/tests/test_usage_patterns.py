import pytest

from pricing_engine import InvalidConfiguration, VariationPattern, generate_monthly_usage, static_usage


def _totals(grid):
    return [[m.total_usage for m in year] for year in grid]


def test_variations_disabled_is_flat():
    grid = generate_monthly_usage(1200, VariationPattern.SEASONAL, enable_variations=False)
    assert len(grid) == 3 and all(len(y) == 12 for y in grid)
    assert all(m.base_usage == 1200 and m.variation == 0 for y in grid for m in y)


def test_seasonal_peaks_balance_the_year():
    grid = generate_monthly_usage(1200, "seasonal")
    year = _totals(grid)[0]
    for peak in (0, 1, 10, 11):
        assert year[peak] == 2100
    assert year[5] == 750
    assert sum(year) == 12 * 1200
    assert grid[0][0].base_usage == 1200
    assert grid[0][0].variation == 900


def test_highly_seasonal():
    year = _totals(generate_monthly_usage(1000, "highly-seasonal"))[1]
    assert year[1] == 5000 and year[4] == 5000
    assert year[0] == 200
    assert sum(year) == 12000


def test_steady_growth_compounds_across_years():
    totals = _totals(generate_monthly_usage(1000, "steady-growth"))
    assert totals[0][0] == 1000
    assert totals[0][1] == 1050
    assert totals[1][0] == 1796  # 1000 * 1.05 ** 12
    assert totals[2][11] > totals[2][10]


@pytest.mark.parametrize("pattern, bound", [("super-stable", 0.03), ("highly-variable", 0.3)])
def test_random_patterns_are_seeded_and_bounded(pattern, bound):
    a = generate_monthly_usage(10000, pattern, seed=42)
    b = generate_monthly_usage(10000, pattern, seed=42)
    assert a == b
    for v in (x for y in _totals(a) for x in y):
        assert 10000 * (1 - bound) - 1 <= v <= 10000 * (1 + bound) + 1


def test_random_patterns_differ_by_seed():
    a = _totals(generate_monthly_usage(10000, "highly-variable", seed=1))
    b = _totals(generate_monthly_usage(10000, "highly-variable", seed=2))
    assert a != b


def test_unknown_pattern():
    with pytest.raises(InvalidConfiguration):
        generate_monthly_usage(1000, "lunar")


def test_static_usage():
    grid = static_usage([[float(m) for m in range(12)]] * 3)
    assert grid[2][11].total_usage == 11.0
    assert grid[2][11].variation == 0
    with pytest.raises(InvalidConfiguration):
        static_usage([[1.0] * 12] * 2)
