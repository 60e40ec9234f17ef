# -*- coding: utf-8 -*-
"""
Mock Resource Gateway for Development.

Keeps shows, events, showtimes, categories, price tiers and seat sections
in memory so the wizard can run without a backend. Parent references are
checked the way the real API checks them, and failures can be injected
per method to rehearse error paths.
"""

import time
import uuid
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from models import (
    Show, ShowCreateInput, ShowUpdateInput, PublishShowInput,
    Event, EventCreateInput,
    Showtime, ShowtimeCreateInput,
    Category, CategoryCreateInput,
    PriceTier, PriceTierSpec,
    SeatSection, SeatSectionCreateInput,
)
from services.exceptions import ApiException, NetworkException
from services.resource_gateway import ResourceGateway, GatewayType
from utils.logger import get_logger

logger = get_logger(__name__)


class MockResourceGateway(ResourceGateway):
    """
    In-memory resource gateway.

    Features:
    - Server-style identifiers (uuid4 strings)
    - Referential integrity: unknown parent ids are rejected with 404
    - Failure injection through fail_next()
    - Call log for assertions in tests
    """

    def __init__(self, simulate_delay: bool = False, delay_ms: int = 200):
        """
        Initialize mock gateway.

        Args:
            simulate_delay: Whether to simulate network latency
            delay_ms: Simulated delay in milliseconds
        """
        self.simulate_delay = simulate_delay
        self.delay_ms = delay_ms

        # In-memory data stores
        self.shows: Dict[str, Show] = {}
        self.events: Dict[str, Event] = {}
        self.showtimes: Dict[str, Showtime] = {}
        self.categories: Dict[str, Category] = {}
        self.price_tiers: Dict[str, PriceTier] = {}
        self.seat_sections: Dict[str, SeatSection] = {}

        self.calls: List[Tuple[str, Any]] = []
        self._injected_failures: Dict[str, List[Exception]] = {}

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.MOCK

    # ==================== Failure injection ====================

    def fail_next(self, method: str, message: str = "Internal server error",
                  status_code: int = 500, network: bool = False):
        """
        Make the next call to `method` fail.

        Args:
            method: Gateway method name (e.g. "create_event")
            message: Message the server would answer with
            status_code: HTTP status for ApiException
            network: Raise NetworkException instead of ApiException
        """
        if network:
            error = NetworkException(message=message, original_error=ConnectionError(message))
        else:
            error = ApiException(
                message=f"{status_code} Error",
                status_code=status_code,
                response_data={"message": message}
            )
        self._injected_failures.setdefault(method, []).append(error)

    def call_count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def _enter(self, method: str, payload: Any = None):
        self.calls.append((method, payload))
        logger.debug(f"[MOCK] {method}")

        if self.simulate_delay:
            time.sleep(self.delay_ms / 1000.0)

        pending = self._injected_failures.get(method)
        if pending:
            raise pending.pop(0)

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def _not_found(entity: str, entity_id: str) -> ApiException:
        return ApiException(
            message="404 Not Found",
            status_code=404,
            response_data={"message": f"{entity} with id {entity_id} not found"}
        )

    @staticmethod
    def _bad_request(message: str) -> ApiException:
        return ApiException(
            message="400 Bad Request",
            status_code=400,
            response_data={"message": message}
        )

    def _require(self, store: Dict[str, Any], entity: str, entity_id: str):
        if entity_id not in store:
            raise self._not_found(entity, entity_id)
        return store[entity_id]

    def _remove(self, store: Dict[str, Any], entity: str, entity_id: str):
        self._require(store, entity, entity_id)
        del store[entity_id]

    # ==================== Shows ====================

    def create_show(self, data: ShowCreateInput) -> Show:
        self._enter("create_show", data)
        if not data.title:
            raise self._bad_request("Title is required")

        show = Show(
            id=self._new_id(),
            title=data.title,
            description=data.description,
            duration=data.duration,
            venue_id=data.venue_id,
            subtitle=data.subtitle,
            language=data.language,
            age_limit=data.age_limit,
            image_url=data.image_url,
            thumbnail_url=data.thumbnail_url,
            is_active=data.is_active,
        )
        self.shows[show.id] = show
        return show

    def update_show(self, show_id: str, data: ShowUpdateInput) -> Show:
        self._enter("update_show", data)
        show = self._require(self.shows, "Show", show_id)
        changes = {k: v for k, v in vars(data).items() if v is not None}
        updated = replace(show, **changes)
        self.shows[show_id] = updated
        return updated

    def publish_show(self, show_id: str, data: PublishShowInput) -> Show:
        self._enter("publish_show", data)
        show = self._require(self.shows, "Show", show_id)
        updated = replace(show, is_active=data.is_active)
        self.shows[show_id] = updated
        return updated

    def delete_show(self, show_id: str) -> None:
        self._enter("delete_show", show_id)
        self._remove(self.shows, "Show", show_id)

    # ==================== Events ====================

    def create_event(self, data: EventCreateInput) -> Event:
        self._enter("create_event", data)
        self._require(self.shows, "Show", data.show_id)
        date = data.date.isoformat() if hasattr(data.date, "isoformat") else data.date
        event = Event(id=self._new_id(), show_id=data.show_id, date=date)
        self.events[event.id] = event
        return event

    def delete_event(self, event_id: str) -> None:
        self._enter("delete_event", event_id)
        self._remove(self.events, "Event", event_id)

    # ==================== Showtimes ====================

    def create_showtime(self, data: ShowtimeCreateInput) -> Showtime:
        self._enter("create_showtime", data)
        self._require(self.events, "Event", data.event_id)
        payload = data.to_api_dict()
        showtime = Showtime(
            id=self._new_id(),
            event_id=data.event_id,
            start_time=payload["startTime"],
            end_time=payload["endTime"],
        )
        self.showtimes[showtime.id] = showtime
        return showtime

    def delete_showtime(self, showtime_id: str) -> None:
        self._enter("delete_showtime", showtime_id)
        self._remove(self.showtimes, "Showtime", showtime_id)
        # Seat sections go with their showtime
        for section_id in [s.id for s in self.seat_sections.values() if s.showtime_id == showtime_id]:
            del self.seat_sections[section_id]

    # ==================== Categories ====================

    def create_category(self, data: CategoryCreateInput) -> Category:
        self._enter("create_category", data)
        self._require(self.shows, "Show", data.show_id)
        category = Category(
            id=self._new_id(),
            name=data.name,
            type=data.type,
            description=data.description,
            capacity=data.capacity,
            show_id=data.show_id,
        )
        self.categories[category.id] = category
        return category

    def delete_category(self, category_id: str) -> None:
        self._enter("delete_category", category_id)
        self._remove(self.categories, "Category", category_id)

    # ==================== Price Tiers ====================

    def create_price_tier(self, data: PriceTierSpec) -> PriceTier:
        self._enter("create_price_tier", data)
        self._require(self.shows, "Show", data.show_id)
        self._require(self.categories, "Category", data.category_id)
        price_tier = PriceTier(
            id=self._new_id(),
            show_id=data.show_id,
            category_id=data.category_id,
            price=data.price,
            currency=data.currency,
            description=data.description,
            capacity=data.capacity,
        )
        self.price_tiers[price_tier.id] = price_tier
        return price_tier

    def delete_price_tier(self, price_tier_id: str) -> None:
        self._enter("delete_price_tier", price_tier_id)
        self._remove(self.price_tiers, "Price tier", price_tier_id)

    # ==================== Seat Sections ====================

    def create_seat_section(self, data: SeatSectionCreateInput) -> SeatSection:
        self._enter("create_seat_section", data)
        self._require(self.showtimes, "Showtime", data.showtime_id)
        self._require(self.price_tiers, "Price tier", data.price_tier_id)
        section = SeatSection(
            id=self._new_id(),
            showtime_id=data.showtime_id,
            price_tier_id=data.price_tier_id,
            name=data.name,
            available_seats=data.available_seats,
        )
        self.seat_sections[section.id] = section
        return section

    def delete_seat_section(self, seat_section_id: str) -> None:
        self._enter("delete_seat_section", seat_section_id)
        self._remove(self.seat_sections, "Seat section", seat_section_id)

    # ==================== Inspection ====================

    def get_show(self, show_id: str) -> Optional[Show]:
        return self.shows.get(show_id)
