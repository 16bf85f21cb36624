"""
Rate Plan Base Types

Shared value types for courier rate comparison: package, rate plan and quote.
"""

from dataclasses import dataclass
import math
import re

import polars as pl


# =============================================================================
# ERRORS
# =============================================================================

class InvalidPackageError(ValueError):
    """Package weight or a dimension is zero, negative, NaN or infinite."""


class NoRatesAvailableError(ValueError):
    """A comparison was requested over an empty list of rate plans."""

    def __init__(self, message: str = "no rates available"):
        super().__init__(message)


# =============================================================================
# PACKAGE
# =============================================================================

def _is_positive(value: float) -> bool:
    """True for finite values above zero (NaN and inf are rejected)."""
    return math.isfinite(value) and value > 0


def _is_non_negative(value: float) -> bool:
    return math.isfinite(value) and value >= 0


@dataclass(frozen=True)
class Dimensions:
    """Package dimensions in centimetres."""

    length_cm: float
    width_cm: float
    height_cm: float

    def __post_init__(self):
        for field_name in ("length_cm", "width_cm", "height_cm"):
            value = getattr(self, field_name)
            if not _is_positive(value):
                raise InvalidPackageError(f"{field_name} must be positive and finite, got {value}")

    @property
    def volume_cm3(self) -> float:
        return self.length_cm * self.width_cm * self.height_cm


@dataclass(frozen=True)
class Package:
    """
    A package to ship.

    Attributes:
        weight_kg   - Actual weight in kilograms
        dimensions  - Length, width and height in centimetres

    Zero, negative and non-finite values are rejected with InvalidPackageError.
    """

    weight_kg: float
    dimensions: Dimensions

    def __post_init__(self):
        if not _is_positive(self.weight_kg):
            raise InvalidPackageError(f"weight_kg must be positive and finite, got {self.weight_kg}")

    @classmethod
    def from_values(
        cls,
        weight_kg: float,
        length_cm: float,
        width_cm: float,
        height_cm: float,
    ) -> "Package":
        """Build a package from plain numbers."""
        return cls(weight_kg, Dimensions(length_cm, width_cm, height_cm))

    @property
    def volume_cm3(self) -> float:
        return self.dimensions.volume_cm3


# =============================================================================
# RATE PLAN
# =============================================================================

@dataclass(frozen=True)
class RatePlan:
    """
    A courier's pricing rule.

    Attributes:
        IDENTITY
            name        - Display name, also the plan identifier (e.g., "DHL Express")

        PRICING
            base_fee    - Flat fee charged on every shipment
            weight_rate - Cost per kilogram of actual weight
            volume_rate - Cost per cubic centimetre (None = not charged)
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    base_fee: float
    weight_rate: float = 0.0
    volume_rate: float | None = None

    def __post_init__(self):
        errors = []
        if not self.name or not self.name.strip():
            errors.append("name must not be empty")
        if not _is_non_negative(self.base_fee):
            errors.append(f"base_fee must be non-negative and finite, got {self.base_fee}")
        if not _is_non_negative(self.weight_rate):
            errors.append(f"weight_rate must be non-negative and finite, got {self.weight_rate}")
        if self.volume_rate is not None and not _is_non_negative(self.volume_rate):
            errors.append(f"volume_rate must be non-negative and finite, got {self.volume_rate}")
        if errors:
            raise ValueError(f"Rate plan '{self.name}' is invalid:\n  " + "\n  ".join(errors))

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @property
    def effective_volume_rate(self) -> float:
        """Volume rate with an undefined rate treated as zero."""
        return self.volume_rate if self.volume_rate is not None else 0.0

    @property
    def column(self) -> str:
        """Output column for this plan's cost (e.g., "cost_dhl_express")."""
        slug = re.sub(r"[^a-z0-9]+", "_", self.name.lower()).strip("_")
        return f"cost_{slug}"

    def cost(self, package: Package) -> float:
        """Total cost of shipping a package under this plan."""
        return (
            self.base_fee
            + package.weight_kg * self.weight_rate
            + package.volume_cm3 * self.effective_volume_rate
        )

    def cost_expr(self) -> pl.Expr:
        """
        Polars expression for this plan's cost.

        Expects weight_kg and volume_cm3 columns. Same operation order as
        cost() so both forms produce identical floats.
        """
        return (
            pl.lit(self.base_fee)
            + pl.col("weight_kg") * self.weight_rate
            + pl.col("volume_cm3") * self.effective_volume_rate
        )


# =============================================================================
# QUOTE
# =============================================================================

@dataclass(frozen=True)
class Quote:
    """Cost of shipping one package under one plan."""

    plan_name: str
    cost: float

    def __str__(self) -> str:
        return f"Service: {self.plan_name}, Total cost: ${self.cost:.2f}"
