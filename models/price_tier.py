# -*- coding: utf-8 -*-
"""
Price tier entity model and the price tier step input.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from .base import from_api, compact


@dataclass
class PriceTier:
    id: str = ""
    show_id: str = ""
    category_id: str = ""
    price: Decimal = Decimal("0")
    currency: str = ""
    description: Optional[str] = None
    capacity: int = 0
    is_active: bool = True

    def __post_init__(self):
        if self.price is None:
            self.price = Decimal("0")
        if not isinstance(self.price, Decimal):
            self.price = Decimal(str(self.price))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceTier":
        return from_api(cls, data, {
            "showId": "show_id",
            "categoryId": "category_id",
            "isActive": "is_active",
        })


@dataclass
class PriceTierSpec:
    """
    Input for the price tier step.

    Consumed immediately by the gateway call; never stored as an entity.
    Price is a non-negative decimal, capacity a non-negative integer.
    """

    show_id: str
    category_id: str
    price: Decimal
    currency: str
    description: str = ""
    capacity: int = 0

    def __post_init__(self):
        if self.price is None or isinstance(self.price, Decimal):
            return
        try:
            self.price = Decimal(str(self.price))
        except InvalidOperation:
            pass  # kept as given; StepValidator.validate_price_tier rejects it

    def to_api_dict(self) -> Dict[str, Any]:
        return compact({
            "showId": self.show_id,
            "categoryId": self.category_id,
            "price": self.price,
            "currency": self.currency,
            "description": self.description,
            "capacity": self.capacity,
        })
