"""
Booking Pricing  (Strategy Pattern)
===================================

Formula
-------
Price = Distance_KM x Vehicle.Price_Per_KM

A rider may supply an explicit non-zero total when booking a pre-selected
vehicle; that figure is trusted verbatim.  Confirmation always recomputes
from distance and the bound vehicle's rate.

Complexity: O(1) per price calculation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


# ── Strategy hierarchy ────────────────────────────────────────────────


class PricingStrategy(ABC):
    @abstractmethod
    def calculate(self, distance_km: float, price_per_km: float) -> float: ...


class PerKmPricing(PricingStrategy):
    def calculate(self, distance_km: float, price_per_km: float) -> float:
        return round((distance_km or 0.0) * (price_per_km or 0.0), 2)


class FixedPricing(PricingStrategy):
    """Caller-supplied total; distance and rate are ignored."""

    def __init__(self, total: float):
        self.total = total

    def calculate(self, distance_km: float, price_per_km: float) -> float:
        return self.total


# ── Engine facade ─────────────────────────────────────────────────────


class PricingEngine:
    """High-level API used by the booking lifecycle."""

    def quote_at_creation(
        self,
        distance_km: float,
        price_per_km: Optional[float],
        explicit_total: Optional[float] = None,
    ) -> float:
        """
        Price for a newly created booking.

        * explicit non-zero total      -> kept as is
        * vehicle known (rate given)   -> distance x rate
        * no vehicle yet               -> 0
        """
        if explicit_total:
            strategy: PricingStrategy = FixedPricing(explicit_total)
        elif price_per_km is not None:
            strategy = PerKmPricing()
        else:
            return 0.0
        return strategy.calculate(distance_km, price_per_km or 0.0)

    def quote_at_confirmation(
        self, distance_km: float, price_per_km: float
    ) -> float:
        return PerKmPricing().calculate(distance_km, price_per_km)
