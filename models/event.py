# -*- coding: utf-8 -*-
"""
Event entity model (one dated occurrence of a show).
"""

from dataclasses import dataclass
import datetime
from typing import Any, Dict, Union

from .base import from_api, compact


@dataclass
class Event:
    id: str = ""
    show_id: str = ""
    date: str = ""
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        return from_api(cls, data, {"showId": "show_id", "isActive": "is_active"})


@dataclass
class EventCreateInput:
    show_id: str
    date: Union[datetime.date, str]

    def to_api_dict(self) -> Dict[str, Any]:
        return compact({"showId": self.show_id, "date": self.date})
