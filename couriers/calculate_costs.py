"""
Courier Shipping Cost Calculator

Two ways in, same numbers out.

SCALAR
------
    compute_cost(package, plan)     - cost of one package under one plan
    quote_all(package, plans)       - one Quote per plan, input order
    find_cheapest(package, plans)   - lowest Quote, first plan wins ties

DATAFRAME
---------
DataFrame in, DataFrame out. The input can come from any source (generated
stress-test packages, CSV, manual creation) as long as it contains the
required columns. The output is the same DataFrame with calculation columns
and costs appended.

REQUIRED INPUT COLUMNS
    weight_kg           - Actual weight in kilograms
    length_cm           - Package length in centimetres
    width_cm            - Package width in centimetres
    height_cm           - Package height in centimetres

OUTPUT COLUMNS ADDED
    supplement_shipments() adds:
        - volume_cm3

    calculate() adds:
        - cost_* amounts, one per rate plan (e.g., cost_dhl_express)
        - cheapest_cost, cheapest_plan
        - calculator_version

USAGE
-----
    from couriers.calculate_costs import calculate_costs, find_cheapest
    result = calculate_costs(df)
    quote = find_cheapest(package, ALL)
"""

import logging

import polars as pl

from shared.rate_plans import NoRatesAvailableError, Package, Quote, RatePlan
from .data import PACKAGE_COLUMNS
from .rate_plans import ALL, validate_rate_plans
from .version import VERSION


logger = logging.getLogger(__name__)


# =============================================================================
# SCALAR API
# =============================================================================

def compute_cost(package: Package, rate_plan: RatePlan) -> float:
    """
    Cost of shipping a package under a rate plan.

    base_fee + weight_kg * weight_rate + volume_cm3 * volume_rate, with an
    undefined volume rate counted as zero.
    """
    return rate_plan.cost(package)


def quote_all(package: Package, rate_plans: list[RatePlan]) -> list[Quote]:
    """Quote a package under every plan, preserving input order."""
    return [Quote(plan.name, compute_cost(package, plan)) for plan in rate_plans]


def find_cheapest(package: Package, rate_plans: list[RatePlan]) -> Quote:
    """
    Find the cheapest plan for a package.

    Ties go to the plan listed first.

    Raises:
        NoRatesAvailableError: if rate_plans is empty
    """
    best = None
    for quote in quote_all(package, rate_plans):
        if best is None or quote.cost < best.cost:
            best = quote

    if best is None:
        raise NoRatesAvailableError()

    logger.debug("Cheapest for %s: %s", package, best)
    return best


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def calculate_costs(
    df: pl.DataFrame,
    rate_plans: list[RatePlan] | None = None
) -> pl.DataFrame:
    """
    Calculate shipping costs for a shipment DataFrame.

    This is the main entry point. Takes raw package data and returns
    the same DataFrame with all calculation columns and costs appended.

    Args:
        df: Raw package DataFrame with required columns (see module docstring)
        rate_plans: Plans to compare (defaults to all courier plans)

    Returns:
        DataFrame with volume, per-plan costs and the cheapest option
    """
    df = supplement_shipments(df)
    df = calculate(df, rate_plans)
    return df


# =============================================================================
# SUPPLEMENT SHIPMENTS
# =============================================================================

def supplement_shipments(df: pl.DataFrame) -> pl.DataFrame:
    """
    Validate package data and add volume.

    Raises:
        ValueError: if required columns are missing or any weight or
            dimension is missing, NaN, infinite, zero or negative

    Returns:
        DataFrame with added column: volume_cm3
    """
    missing = [c for c in PACKAGE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")

    invalid_count = df.filter(
        pl.any_horizontal([_is_invalid(c) for c in PACKAGE_COLUMNS])
    ).height
    if invalid_count > 0:
        raise ValueError(
            f"{invalid_count} package(s) have a missing, non-finite, zero or negative "
            f"weight or dimension. "
            f"Check {', '.join(PACKAGE_COLUMNS)} values."
        )

    return df.with_columns(
        (pl.col("length_cm") * pl.col("width_cm") * pl.col("height_cm"))
        .alias("volume_cm3")
    )


def _is_invalid(column: str) -> pl.Expr:
    """True where a value is null, NaN, infinite, zero or negative."""
    value = pl.col(column).cast(pl.Float64)
    return (
        value.is_null() | value.is_nan() | value.is_infinite() | (value <= 0)
    ).fill_null(True)


# =============================================================================
# CALCULATE COSTS
# =============================================================================

def calculate(
    df: pl.DataFrame,
    rate_plans: list[RatePlan] | None = None
) -> pl.DataFrame:
    """
    Calculate per-plan costs and pick the cheapest plan for each package.

    Args:
        df: Supplemented package DataFrame from supplement_shipments
        rate_plans: Plans to compare (defaults to all courier plans)

    Raises:
        NoRatesAvailableError: if rate_plans is empty
        ValueError: if plan names repeat or map to the same cost column

    Returns:
        DataFrame with cost columns, cheapest option and version

    Processing order:
        1. Plan costs  - one cost_* column per plan
        2. Cheapest    - row minimum and the first plan matching it
        3. Version     - stamp calculator version
    """
    if rate_plans is None:
        rate_plans = ALL
    if not rate_plans:
        raise NoRatesAvailableError()
    validate_rate_plans(rate_plans)

    df = _apply_rate_plans(df, rate_plans)
    df = _select_cheapest(df, rate_plans)
    df = _stamp_version(df)

    return df


def _apply_rate_plans(df: pl.DataFrame, rate_plans: list[RatePlan]) -> pl.DataFrame:
    """Add one cost column per rate plan."""
    return df.with_columns([plan.cost_expr().alias(plan.column) for plan in rate_plans])


def _select_cheapest(df: pl.DataFrame, rate_plans: list[RatePlan]) -> pl.DataFrame:
    """
    Add cheapest_cost and cheapest_plan.

    Plans are checked in reverse so the earliest plan matching the minimum
    ends up outermost (first match wins on ties).
    """
    cost_cols = [plan.column for plan in rate_plans]

    df = df.with_columns(pl.min_horizontal(cost_cols).alias("cheapest_cost"))

    plan_expr = pl.lit(None).cast(pl.Utf8)
    for plan in reversed(rate_plans):
        plan_expr = (
            pl.when(pl.col(plan.column) == pl.col("cheapest_cost"))
            .then(pl.lit(plan.name))
            .otherwise(plan_expr)
        )

    return df.with_columns(plan_expr.alias("cheapest_plan"))


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator version on output."""
    return df.with_columns(pl.lit(VERSION).alias("calculator_version"))


# =============================================================================
# SUMMARY
# =============================================================================

def cheapest_overall(df: pl.DataFrame) -> Quote:
    """
    Lowest cheapest_cost across all rows of a calculated DataFrame.

    The first such row wins on ties.

    Raises:
        ValueError: if the DataFrame is empty or has no priced rows
    """
    if df.height == 0:
        raise ValueError("No packages to compare")

    index = df["cheapest_cost"].arg_min()
    if index is None:
        raise ValueError("No priced packages to compare (cheapest_cost is all null)")

    row = df.row(index, named=True)
    return Quote(row["cheapest_plan"], row["cheapest_cost"])


__all__ = [
    "compute_cost",
    "quote_all",
    "find_cheapest",
    "calculate_costs",
    "supplement_shipments",
    "calculate",
    "cheapest_overall",
]
