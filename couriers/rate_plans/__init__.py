"""
Courier Rate Plans

Exports the fixed list of courier rate plans compared by the calculator.

Order matters: when two plans quote the same cost, the one listed first in
ALL wins.

Usage:
    from couriers.rate_plans import ALL, get_rate_plan
"""

from shared.rate_plans import RatePlan
from .rappi_courier import RAPPI_COURIER
from .uber_paquetes import UBER_PAQUETES
from .dhl_express import DHL_EXPRESS


# All rate plans - add new couriers here
ALL: list[RatePlan] = [RAPPI_COURIER, UBER_PAQUETES, DHL_EXPRESS]


# =============================================================================
# HELPERS
# =============================================================================

def get_rate_plan(name: str) -> RatePlan:
    """Look up a rate plan by name (case-insensitive)."""
    wanted = name.strip().lower()
    for plan in ALL:
        if plan.name.lower() == wanted:
            return plan
    raise KeyError(f"Unknown rate plan '{name}'. Available: {', '.join(p.name for p in ALL)}")


def rate_plan_names() -> list[str]:
    """Names of all rate plans, in comparison order."""
    return [p.name for p in ALL]


# =============================================================================
# VALIDATION
# =============================================================================

def validate_rate_plans(plans: list[RatePlan] | None = None) -> None:
    """
    Validate rate plan configuration integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    if plans is None:
        plans = ALL

    errors = []
    seen_names = set()
    seen_columns = set()

    for plan in plans:
        key = plan.name.lower()
        if key in seen_names:
            errors.append(f"{plan.name}: duplicate plan name")
        # Distinct names can still collapse to the same output column
        elif plan.column in seen_columns:
            errors.append(f"{plan.name}: output column '{plan.column}' already used")

        seen_names.add(key)
        seen_columns.add(plan.column)

    if errors:
        raise ValueError("Rate plan configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_rate_plans()

__all__ = [
    # Plans
    "RAPPI_COURIER",
    "UBER_PAQUETES",
    "DHL_EXPRESS",
    # Lists
    "ALL",
    # Helpers
    "get_rate_plan",
    "rate_plan_names",
    "validate_rate_plans",
]
