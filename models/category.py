# -*- coding: utf-8 -*-
"""
Seating category entity model (e.g. VIP, Premium, Regular).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import from_api, compact


@dataclass
class Category:
    id: str = ""
    name: str = ""
    type: str = ""
    description: Optional[str] = None
    capacity: Optional[int] = None
    show_id: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return from_api(cls, data, {"showId": "show_id", "isActive": "is_active"})


@dataclass
class CategoryCreateInput:
    show_id: str
    name: str
    type: str
    description: Optional[str] = None
    capacity: Optional[int] = None

    def to_api_dict(self) -> Dict[str, Any]:
        return compact({
            "showId": self.show_id,
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "capacity": self.capacity,
        })
