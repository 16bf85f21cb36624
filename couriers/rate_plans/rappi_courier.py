"""
Rappi Courier

Lowest flat fee of the three couriers, mid-range per-kg and per-volume rates.
Usually the cheapest option for small, light packages.
"""

from shared.rate_plans import RatePlan


RAPPI_COURIER = RatePlan(
    name="Rappi Courier",
    base_fee=5.00,
    weight_rate=1.50,
    volume_rate=0.001,
)
