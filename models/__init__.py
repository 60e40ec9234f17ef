# -*- coding: utf-8 -*-
"""
Show Wizard Data Models
"""

from .show import Show, ShowCreateInput, ShowUpdateInput, PublishShowInput
from .event import Event, EventCreateInput
from .showtime import Showtime, ShowtimeCreateInput
from .category import Category, CategoryCreateInput
from .price_tier import PriceTier, PriceTierSpec
from .seat_section import SeatSection, SeatSectionCreateInput

__all__ = [
    "Show",
    "ShowCreateInput",
    "ShowUpdateInput",
    "PublishShowInput",
    "Event",
    "EventCreateInput",
    "Showtime",
    "ShowtimeCreateInput",
    "Category",
    "CategoryCreateInput",
    "PriceTier",
    "PriceTierSpec",
    "SeatSection",
    "SeatSectionCreateInput",
]
