# -*- coding: utf-8 -*-
"""
Showtime entity model (a start/end slot within an event).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Union

from .base import from_api, compact


@dataclass
class Showtime:
    id: str = ""
    event_id: str = ""
    start_time: str = ""
    end_time: str = ""
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Showtime":
        return from_api(cls, data, {
            "eventId": "event_id",
            "startTime": "start_time",
            "endTime": "end_time",
            "isActive": "is_active",
        })


@dataclass
class ShowtimeCreateInput:
    event_id: str
    start_time: Union[datetime, str]
    end_time: Union[datetime, str]

    def to_api_dict(self) -> Dict[str, Any]:
        return compact({
            "eventId": self.event_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
        })
