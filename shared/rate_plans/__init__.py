"""
Shared Rate Plans

Value types and errors for courier rate comparison.
"""

from .base import (
    Dimensions,
    InvalidPackageError,
    NoRatesAvailableError,
    Package,
    Quote,
    RatePlan,
)

__all__ = [
    "Dimensions",
    "InvalidPackageError",
    "NoRatesAvailableError",
    "Package",
    "Quote",
    "RatePlan",
]
