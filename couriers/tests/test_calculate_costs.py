"""
Unit Tests for Courier Cost Calculator

Tests cost formula, cheapest selection, tie handling and the DataFrame pipeline.

Run with: pytest couriers/tests/test_calculate_costs.py -v
"""

import pytest
import polars as pl

from shared.rate_plans import NoRatesAvailableError, Package, RatePlan
from couriers.calculate_costs import (
    calculate,
    calculate_costs,
    cheapest_overall,
    compute_cost,
    find_cheapest,
    quote_all,
    supplement_shipments,
)
from couriers.data import SAMPLE_PACKAGE, packages_to_frame
from couriers.rate_plans import ALL, DHL_EXPRESS, RAPPI_COURIER, UBER_PAQUETES
from couriers.version import VERSION


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def small_package():
    """2 kg, 10x10x10 cm (1000 cm3)."""
    return Package.from_values(weight_kg=2.0, length_cm=10.0, width_cm=10.0, height_cm=10.0)


@pytest.fixture
def two_plans():
    """A: 10 + 1/kg + 0.001/cm3, B: 5 + 2/kg + 0.0005/cm3."""
    return [
        RatePlan("Service A", base_fee=10.0, weight_rate=1.0, volume_rate=0.001),
        RatePlan("Service B", base_fee=5.0, weight_rate=2.0, volume_rate=0.0005),
    ]


@pytest.fixture
def tied_plans():
    """Both cost 9.00 for a 2 kg package (no volume rate)."""
    return [
        RatePlan("First", base_fee=5.0, weight_rate=2.0),
        RatePlan("Second", base_fee=3.0, weight_rate=3.0),
    ]


@pytest.fixture
def base_frame():
    """Sample package as a single-row DataFrame."""
    return packages_to_frame([SAMPLE_PACKAGE])


# =============================================================================
# COMPUTE COST TESTS
# =============================================================================

class TestComputeCost:
    """Tests for the cost formula."""

    def test_volume(self, small_package):
        """Volume = length * width * height."""
        assert small_package.volume_cm3 == pytest.approx(1000.0)

    def test_formula(self, small_package, two_plans):
        """10 + 1*2 + 0.001*1000 = 13.00 and 5 + 2*2 + 0.0005*1000 = 9.50."""
        assert compute_cost(small_package, two_plans[0]) == pytest.approx(13.0)
        assert compute_cost(small_package, two_plans[1]) == pytest.approx(9.5)

    def test_zero_rates_cost_nothing(self):
        """A plan with no fee and no rates costs 0."""
        plan = RatePlan("Free", base_fee=0.0, weight_rate=0.0, volume_rate=0.0)
        package = Package.from_values(10.0, 10.0, 10.0, 10.0)
        assert compute_cost(package, plan) == 0.0

    def test_undefined_volume_rate_is_zero(self, small_package):
        """volume_rate=None contributes nothing."""
        plan = RatePlan("Weight only", base_fee=1.0, weight_rate=2.0)
        assert compute_cost(small_package, plan) == pytest.approx(5.0)

    def test_sample_package_costs(self):
        """Sample package (5.5 kg, 3000 cm3) under each courier."""
        assert compute_cost(SAMPLE_PACKAGE, RAPPI_COURIER) == pytest.approx(16.25)
        assert compute_cost(SAMPLE_PACKAGE, UBER_PAQUETES) == pytest.approx(17.00)
        assert compute_cost(SAMPLE_PACKAGE, DHL_EXPRESS) == pytest.approx(31.50)

    @pytest.mark.parametrize("plan", ALL, ids=lambda p: p.name)
    def test_non_negative(self, plan, small_package):
        assert compute_cost(small_package, plan) >= 0

    @pytest.mark.parametrize("plan", ALL, ids=lambda p: p.name)
    @pytest.mark.parametrize("field", ["weight_kg", "length_cm", "width_cm", "height_cm"])
    def test_non_decreasing(self, plan, field):
        """Increasing weight or any dimension never lowers the cost."""
        values = {"weight_kg": 2.0, "length_cm": 10.0, "width_cm": 20.0, "height_cm": 30.0}
        costs = []
        for step in [1.0, 1.5, 2.0, 5.0]:
            scaled = dict(values, **{field: values[field] * step})
            costs.append(compute_cost(Package.from_values(**scaled), plan))
        assert costs == sorted(costs)

    def test_deterministic(self, small_package, two_plans):
        """Same inputs, same result."""
        first = [compute_cost(small_package, p) for p in two_plans]
        second = [compute_cost(small_package, p) for p in two_plans]
        assert first == second


# =============================================================================
# FIND CHEAPEST TESTS
# =============================================================================

class TestFindCheapest:
    """Tests for cheapest plan selection."""

    def test_cheapest_plan(self, small_package, two_plans):
        """Service B (9.50) beats Service A (13.00)."""
        best = find_cheapest(small_package, two_plans)
        assert best.plan_name == "Service B"
        assert best.cost == pytest.approx(9.5)

    def test_not_above_any_quote(self, small_package):
        best = find_cheapest(small_package, ALL)
        for plan in ALL:
            assert best.cost <= compute_cost(small_package, plan)

    def test_sample_package_rappi(self):
        best = find_cheapest(SAMPLE_PACKAGE, ALL)
        assert best.plan_name == "Rappi Courier"
        assert best.cost == pytest.approx(16.25)

    def test_tie_first_wins(self, tied_plans):
        """5 + 2*2 = 9 and 3 + 3*2 = 9: first listed plan wins."""
        package = Package.from_values(2.0, 10.0, 10.0, 10.0)
        best = find_cheapest(package, tied_plans)
        assert best.plan_name == "First"
        assert best.cost == 9.0

    def test_tie_follows_input_order(self, tied_plans):
        package = Package.from_values(2.0, 10.0, 10.0, 10.0)
        best = find_cheapest(package, list(reversed(tied_plans)))
        assert best.plan_name == "Second"

    def test_single_plan(self, small_package):
        best = find_cheapest(small_package, [DHL_EXPRESS])
        assert best.plan_name == "DHL Express"

    def test_empty_list_reports_no_rates(self, small_package):
        with pytest.raises(NoRatesAvailableError, match="no rates available"):
            find_cheapest(small_package, [])

    def test_repeated_calls_identical(self, small_package):
        results = {find_cheapest(small_package, ALL) for _ in range(100)}
        assert len(results) == 1

    def test_quote_all_preserves_order(self, small_package):
        quotes = quote_all(small_package, ALL)
        assert [q.plan_name for q in quotes] == ["Rappi Courier", "Uber Paquetes", "DHL Express"]

    def test_quote_all_empty(self, small_package):
        assert quote_all(small_package, []) == []


# =============================================================================
# DATAFRAME PIPELINE TESTS
# =============================================================================

class TestSupplementShipments:
    """Tests for supplement_shipments."""

    def test_volume_column(self, base_frame):
        df = supplement_shipments(base_frame)
        assert df["volume_cm3"][0] == pytest.approx(3000.0)

    def test_missing_columns(self):
        df = pl.DataFrame({"weight_kg": [1.0], "length_cm": [10.0]})
        with pytest.raises(ValueError, match="width_cm, height_cm"):
            supplement_shipments(df)

    def test_rejects_non_positive(self, base_frame):
        df = pl.concat([base_frame, base_frame.with_columns(pl.lit(0.0).alias("weight_kg"))])
        with pytest.raises(ValueError, match="1 package"):
            supplement_shipments(df)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), None], ids=["nan", "inf", "null"])
    @pytest.mark.parametrize("column", ["weight_kg", "height_cm"])
    def test_rejects_missing_and_non_finite(self, base_frame, column, value):
        bad = base_frame.with_columns(pl.lit(value, dtype=pl.Float64).alias(column))
        df = pl.concat([base_frame, bad])
        with pytest.raises(ValueError, match="1 package"):
            supplement_shipments(df)


class TestCalculate:
    """Tests for calculate and calculate_costs."""

    def test_cost_columns(self, base_frame):
        df = calculate_costs(base_frame)
        assert df["cost_rappi_courier"][0] == pytest.approx(16.25)
        assert df["cost_uber_paquetes"][0] == pytest.approx(17.00)
        assert df["cost_dhl_express"][0] == pytest.approx(31.50)

    def test_cheapest_columns(self, base_frame):
        df = calculate_costs(base_frame)
        assert df["cheapest_plan"][0] == "Rappi Courier"
        assert df["cheapest_cost"][0] == pytest.approx(16.25)

    def test_version_stamped(self, base_frame):
        df = calculate_costs(base_frame)
        assert df["calculator_version"][0] == VERSION

    def test_tie_first_wins(self, tied_plans):
        df = calculate_costs(packages_to_frame([Package.from_values(2.0, 10.0, 10.0, 10.0)]), tied_plans)
        assert df["cheapest_plan"][0] == "First"
        assert df["cheapest_cost"][0] == 9.0

    def test_empty_plans(self, base_frame):
        with pytest.raises(NoRatesAvailableError):
            calculate(supplement_shipments(base_frame), [])

    def test_duplicate_plans(self, base_frame):
        plans = [RatePlan("A", base_fee=1.0), RatePlan("A", base_fee=2.0)]
        with pytest.raises(ValueError, match="duplicate plan name"):
            calculate_costs(base_frame, plans)

    def test_clashing_plan_columns(self, base_frame):
        """DHL Express and DHL-Express both map to cost_dhl_express."""
        plans = [DHL_EXPRESS, RatePlan("DHL-Express", base_fee=1.0)]
        with pytest.raises(ValueError, match="cost_dhl_express"):
            calculate_costs(base_frame, plans)

    def test_matches_scalar(self, two_plans):
        """DataFrame and scalar paths agree."""
        packages = [
            Package.from_values(1.0, 10.0, 10.0, 10.0),
            Package.from_values(7.3, 12.5, 33.1, 18.2),
            Package.from_values(20.9, 59.9, 59.9, 59.9),
        ]
        df = calculate_costs(packages_to_frame(packages), two_plans)
        for i, package in enumerate(packages):
            best = find_cheapest(package, two_plans)
            assert df["cheapest_plan"][i] == best.plan_name
            assert df["cheapest_cost"][i] == pytest.approx(best.cost)
            for plan in two_plans:
                assert df[plan.column][i] == pytest.approx(compute_cost(package, plan))


class TestCheapestOverall:
    """Tests for cheapest_overall."""

    def test_lowest_row(self):
        packages = [
            Package.from_values(5.0, 20.0, 20.0, 20.0),
            Package.from_values(1.0, 10.0, 10.0, 10.0),
            Package.from_values(3.0, 15.0, 15.0, 15.0),
        ]
        best = cheapest_overall(calculate_costs(packages_to_frame(packages)))
        assert best == find_cheapest(packages[1], ALL)

    def test_empty_frame(self):
        df = calculate_costs(packages_to_frame([]))
        with pytest.raises(ValueError, match="No packages"):
            cheapest_overall(df)

    def test_all_null_costs(self):
        df = pl.DataFrame(
            {"cheapest_cost": [None, None], "cheapest_plan": [None, None]},
            schema={"cheapest_cost": pl.Float64, "cheapest_plan": pl.Utf8},
        )
        with pytest.raises(ValueError, match="No priced packages"):
            cheapest_overall(df)
