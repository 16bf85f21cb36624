"""
Uber Paquetes

Higher flat fee than Rappi, offset by lower per-kg and per-volume rates.
Overtakes Rappi on heavier or bulkier packages.
"""

from shared.rate_plans import RatePlan


UBER_PAQUETES = RatePlan(
    name="Uber Paquetes",
    base_fee=8.00,
    weight_rate=1.20,
    volume_rate=0.0008,
)
