# -*- coding: utf-8 -*-
"""
Seat section entity model.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import from_api, compact


@dataclass
class SeatSection:
    id: str = ""
    showtime_id: str = ""
    price_tier_id: str = ""
    name: str = ""
    available_seats: int = 0
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeatSection":
        return from_api(cls, data, {
            "showtimeId": "showtime_id",
            "priceTierId": "price_tier_id",
            "availableSeats": "available_seats",
            "isActive": "is_active",
        })


@dataclass
class SeatSectionCreateInput:
    showtime_id: str
    price_tier_id: str
    name: str
    available_seats: int
    # Used for local validation only; the API takes available seats
    total_seats: Optional[int] = None

    def to_api_dict(self) -> Dict[str, Any]:
        return compact({
            "showtimeId": self.showtime_id,
            "priceTierId": self.price_tier_id,
            "name": self.name,
            "availableSeats": self.available_seats,
        })
