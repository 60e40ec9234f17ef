# -*- coding: utf-8 -*-
"""
Resource Gateway Abstraction Layer.

The wizard never talks HTTP directly; it goes through this interface so the
backend can be swapped:
- ShowApiClient: the real REST backend
- MockResourceGateway: in-memory store for development and tests

Every create/update returns the entity with its server-assigned id.
Every failure is raised as ApiException (server answered with an error)
or NetworkException (no answer).
"""

from abc import ABC, abstractmethod
from enum import Enum

from models import (
    Show, ShowCreateInput, ShowUpdateInput, PublishShowInput,
    Event, EventCreateInput,
    Showtime, ShowtimeCreateInput,
    Category, CategoryCreateInput,
    PriceTier, PriceTierSpec,
    SeatSection, SeatSectionCreateInput,
)


class GatewayType(Enum):
    """Supported gateway backends."""
    HTTP_API = "api"
    MOCK = "mock"


class ResourceGateway(ABC):
    """Create/update/delete operations for every wizard resource type."""

    @property
    @abstractmethod
    def gateway_type(self) -> GatewayType:
        """Return the type of this gateway."""
        pass

    # ==================== Shows ====================

    @abstractmethod
    def create_show(self, data: ShowCreateInput) -> Show:
        pass

    @abstractmethod
    def update_show(self, show_id: str, data: ShowUpdateInput) -> Show:
        pass

    @abstractmethod
    def publish_show(self, show_id: str, data: PublishShowInput) -> Show:
        """Mark the show active/published."""
        pass

    @abstractmethod
    def delete_show(self, show_id: str) -> None:
        pass

    # ==================== Events ====================

    @abstractmethod
    def create_event(self, data: EventCreateInput) -> Event:
        pass

    @abstractmethod
    def delete_event(self, event_id: str) -> None:
        pass

    # ==================== Showtimes ====================

    @abstractmethod
    def create_showtime(self, data: ShowtimeCreateInput) -> Showtime:
        pass

    @abstractmethod
    def delete_showtime(self, showtime_id: str) -> None:
        pass

    # ==================== Categories ====================

    @abstractmethod
    def create_category(self, data: CategoryCreateInput) -> Category:
        pass

    @abstractmethod
    def delete_category(self, category_id: str) -> None:
        pass

    # ==================== Price Tiers ====================

    @abstractmethod
    def create_price_tier(self, data: PriceTierSpec) -> PriceTier:
        pass

    @abstractmethod
    def delete_price_tier(self, price_tier_id: str) -> None:
        pass

    # ==================== Seat Sections ====================

    @abstractmethod
    def create_seat_section(self, data: SeatSectionCreateInput) -> SeatSection:
        pass

    @abstractmethod
    def delete_seat_section(self, seat_section_id: str) -> None:
        pass
