# -*- coding: utf-8 -*-
"""
Wizard steps of the show publishing wizard, in their fixed order.
"""

from enum import Enum
from typing import Optional


class WizardStep(Enum):
    """
    The seven steps, declared in wizard order.

    Order comes from declaration; navigation is index arithmetic over
    WizardStep.ordered(), never string comparison.
    """

    SHOW_DETAILS = "show-details"
    EVENTS = "events"
    SHOWTIMES = "showtimes"
    CATEGORIES = "categories"
    PRICE_TIERS = "price-tiers"
    SEAT_SECTIONS = "seat-sections"
    PUBLISH = "publish"

    @classmethod
    def ordered(cls):
        return list(cls)

    @classmethod
    def first(cls) -> "WizardStep":
        return cls.SHOW_DETAILS

    @classmethod
    def last(cls) -> "WizardStep":
        return cls.PUBLISH

    @property
    def index(self) -> int:
        return WizardStep.ordered().index(self)

    @property
    def title(self) -> str:
        return STEP_TITLES[self]

    def next(self) -> Optional["WizardStep"]:
        steps = WizardStep.ordered()
        if self.index < len(steps) - 1:
            return steps[self.index + 1]
        return None

    def previous(self) -> Optional["WizardStep"]:
        if self.index > 0:
            return WizardStep.ordered()[self.index - 1]
        return None


STEP_TITLES = {
    WizardStep.SHOW_DETAILS: "Show Details",
    WizardStep.EVENTS: "Events",
    WizardStep.SHOWTIMES: "Showtimes",
    WizardStep.CATEGORIES: "Seating Categories",
    WizardStep.PRICE_TIERS: "Price Tiers",
    WizardStep.SEAT_SECTIONS: "Seat Sections",
    WizardStep.PUBLISH: "Review & Publish",
}
