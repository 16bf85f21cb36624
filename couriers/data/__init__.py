"""
Courier Data

Sample package for the demo calculator, random package generation for the
stress test, and conversions between Package objects and shipment DataFrames.
"""

from typing import Iterable, Iterator

import numpy as np
import polars as pl

from shared.rate_plans import Package


# =============================================================================
# CONFIGURATION
# =============================================================================

# Demo package: 5.5 kg, 15 x 10 x 20 cm
SAMPLE_PACKAGE = Package.from_values(
    weight_kg=5.5,
    length_cm=15.0,
    width_cm=10.0,
    height_cm=20.0,
)

# Stress test
STRESS_TEST_COUNT = 100_000
WEIGHT_KG_RANGE = (1.0, 21.0)       # [low, high)
DIMENSION_CM_RANGE = (10.0, 60.0)   # [low, high), per side

PACKAGE_COLUMNS = ["weight_kg", "length_cm", "width_cm", "height_cm"]


# =============================================================================
# GENERATION
# =============================================================================

def generate_packages(count: int, seed: int | None = None) -> pl.DataFrame:
    """
    Generate random packages for the stress test.

    Weight and each dimension are drawn uniformly from WEIGHT_KG_RANGE and
    DIMENSION_CM_RANGE. Without a seed the output differs on every call.

    Args:
        count: Number of packages to generate (must be positive)
        seed: Optional seed for reproducible output

    Returns:
        DataFrame with columns: weight_kg, length_cm, width_cm, height_cm
    """
    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")

    rng = np.random.default_rng(seed)

    def uniform(bounds: tuple[float, float]) -> np.ndarray:
        low, high = bounds
        return rng.random(count) * (high - low) + low

    return pl.DataFrame({
        "weight_kg": uniform(WEIGHT_KG_RANGE),
        "length_cm": uniform(DIMENSION_CM_RANGE),
        "width_cm": uniform(DIMENSION_CM_RANGE),
        "height_cm": uniform(DIMENSION_CM_RANGE),
    })


# =============================================================================
# CONVERSIONS
# =============================================================================

def packages_to_frame(packages: Iterable[Package]) -> pl.DataFrame:
    """Build a shipment DataFrame from Package objects."""
    rows = [
        {
            "weight_kg": p.weight_kg,
            "length_cm": p.dimensions.length_cm,
            "width_cm": p.dimensions.width_cm,
            "height_cm": p.dimensions.height_cm,
        }
        for p in packages
    ]
    return pl.DataFrame(rows, schema={c: pl.Float64 for c in PACKAGE_COLUMNS})


def iter_packages(df: pl.DataFrame) -> Iterator[Package]:
    """Yield a Package per row of a shipment DataFrame."""
    for row in df.select(PACKAGE_COLUMNS).iter_rows(named=True):
        yield Package.from_values(**row)


__all__ = [
    # Configuration
    "SAMPLE_PACKAGE",
    "STRESS_TEST_COUNT",
    "WEIGHT_KG_RANGE",
    "DIMENSION_CM_RANGE",
    "PACKAGE_COLUMNS",
    # Generation
    "generate_packages",
    # Conversions
    "packages_to_frame",
    "iter_packages",
]
