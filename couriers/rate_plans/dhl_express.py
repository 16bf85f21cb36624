"""
DHL Express

Premium service: highest flat fee and volume rate, lowest per-kg rate.
"""

from shared.rate_plans import RatePlan


DHL_EXPRESS = RatePlan(
    name="DHL Express",
    base_fee=20.00,
    weight_rate=1.00,
    volume_rate=0.002,
)
