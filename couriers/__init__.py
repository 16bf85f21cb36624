"""
Couriers Module

Cheapest-option calculator over the fixed courier rate plans
(Rappi Courier, Uber Paquetes, DHL Express).
"""

from .calculate_costs import calculate_costs, compute_cost, find_cheapest, quote_all
from .version import VERSION

__all__ = ["calculate_costs", "compute_cost", "find_cheapest", "quote_all", "VERSION"]
