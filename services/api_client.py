# -*- coding: utf-8 -*-
"""
Show API Client - HTTP implementation of the resource gateway
==============================================================

Talks to the ticketing backend's admin endpoints for shows, events,
showtimes, categories, price tiers and seat sections.
"""

import json as _json
import requests
from typing import Optional, Dict, Any
from dataclasses import dataclass

from app.api_config import get_api_settings
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


@dataclass
class ApiConfig:
    """
    Connection settings for the resource API.

    Unset values come from the API settings (environment or .env).

    Example .env:
        API_BASE_URL=http://localhost:3091/api
        API_TIMEOUT=15
        API_TOKEN=<bearer token from the auth layer>
    """
    base_url: str = None
    access_token: Optional[str] = None
    timeout: int = None

    def __post_init__(self):
        """Load from the API settings if not provided."""
        if self.base_url is None or self.timeout is None or self.access_token is None:
            settings = get_api_settings()

            if self.base_url is None:
                self.base_url = settings.base_url
            if self.timeout is None:
                self.timeout = settings.timeout
            if self.access_token is None:
                self.access_token = settings.access_token


class Endpoints:
    """Resource API endpoints used by the wizard."""

    AUTH_VERIFY = "/auth/verify"
    HEALTH = "/health"

    SHOWS = "/shows"
    SHOW = "/shows/{id}"
    SHOW_EVENTS = "/shows/events"
    SHOW_SHOWTIMES = "/shows/showtimes"
    SHOW_SECTIONS = "/shows/sections"  # price tiers are created here

    EVENT = "/events/{id}"
    SHOWTIME = "/showtimes/{id}"
    CATEGORIES = "/categories"
    CATEGORY = "/categories/{id}"
    PRICE_TIER = "/price-tiers/{id}"
    SEAT_SECTIONS = "/seat-sections"
    SEAT_SECTION = "/seat-sections/{id}"


class ShowApiClient(ResourceGateway):
    """
    HTTP client for the show resource API.

    Features:
    - Bearer token authentication (token comes from the auth layer)
    - Request/response logging
    - Uniform error mapping to ApiException / NetworkException

    Usage:
        client = ShowApiClient(ApiConfig(base_url="http://localhost:3091/api"))
        show = client.create_show(ShowCreateInput(title="Hamlet", duration=120, venue_id="v1"))
    """

    def __init__(self, config: Optional[ApiConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.access_token: Optional[str] = self.config.access_token
        self.session = session or requests.Session()

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.HTTP_API

    # ==================== Authentication ====================

    def set_access_token(self, token: Optional[str]):
        """Set access token from the authenticated user session."""
        self.access_token = token
        logger.debug("Access token updated externally")

    def verify_auth(self) -> bool:
        """Check that the current token is accepted by the backend."""
        try:
            self._request("GET", Endpoints.AUTH_VERIFY)
            return True
        except (ApiException, NetworkException) as e:
            logger.warning(f"Auth verification failed: {e}")
            return False

    def health_check(self) -> bool:
        """Check if the API is reachable."""
        try:
            response = self.session.get(f"{self.base_url}{Endpoints.HEALTH}", timeout=5)
            return response.status_code == 200
        except requests.exceptions.RequestException as e:
            logger.debug(f"Health check failed: {e}")
            return False

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json"
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        expect_body: bool = False
    ) -> Any:
        """
        Run one HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., "/shows")
            json_data: JSON payload
            params: Query parameters
            expect_body: Require a JSON object in a successful response

        Returns:
            Response JSON data (None for empty bodies)

        Raises:
            ApiException: HTTP error, or a missing or malformed body when one is expected
            NetworkException: connection error or timeout
        """
        url = f"{self.base_url}{endpoint}"

        logger.info(f"[API REQ] {method} {endpoint}")
        if params:
            logger.info(f"[API REQ] Params: {params}")
        if json_data:
            logger.info(f"[API REQ] Body: {_json.dumps(json_data, ensure_ascii=False, default=str)}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                headers=self._headers(),
                timeout=self.config.timeout
            )
            response.raise_for_status()

            result = None
            if response.text:
                try:
                    result = response.json()
                except ValueError:
                    logger.error(f"[API ERR] {response.status_code} {method} {endpoint} | Body is not JSON")
                    raise ApiException(
                        message="Response body is not valid JSON",
                        status_code=response.status_code
                    )
            if expect_body and not isinstance(result, dict):
                logger.error(f"[API ERR] {response.status_code} {method} {endpoint} | Unexpected body: {result!r}")
                raise ApiException(
                    message="Response body is empty or malformed",
                    status_code=response.status_code
                )

            logger.info(f"[API RES] {response.status_code} {endpoint}")
            if result:
                res_str = _json.dumps(result, ensure_ascii=False, default=str)
                if len(res_str) > 1000:
                    logger.debug(f"[API RES] Body (truncated): {res_str[:1000]}...")
                else:
                    logger.debug(f"[API RES] Body: {res_str}")

            return result

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except (ValueError, AttributeError):
                pass
            if not isinstance(response_data, dict):
                response_data = {"message": str(response_data)}
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data}")
            raise ApiException(
                message=str(e),
                status_code=status_code,
                response_data=response_data
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e
            )

    # ==================== Shows ====================

    def create_show(self, data: ShowCreateInput) -> Show:
        logger.info(f"Creating show: {data.title}")
        result = self._request("POST", Endpoints.SHOWS, json_data=data.to_api_dict(), expect_body=True)
        show = Show.from_dict(result)
        logger.info(f"Created show: {show.id}")
        return show

    def update_show(self, show_id: str, data: ShowUpdateInput) -> Show:
        result = self._request("PUT", Endpoints.SHOW.format(id=show_id), json_data=data.to_api_dict(),
                               expect_body=True)
        return Show.from_dict(result)

    def publish_show(self, show_id: str, data: PublishShowInput) -> Show:
        logger.info(f"Publishing show {show_id}")
        result = self._request("PUT", Endpoints.SHOW.format(id=show_id), json_data=data.to_api_dict(),
                               expect_body=True)
        return Show.from_dict(result)

    def delete_show(self, show_id: str) -> None:
        self._request("DELETE", Endpoints.SHOW.format(id=show_id))

    # ==================== Events ====================

    def create_event(self, data: EventCreateInput) -> Event:
        result = self._request("POST", Endpoints.SHOW_EVENTS, json_data=data.to_api_dict(), expect_body=True)
        return Event.from_dict(result)

    def delete_event(self, event_id: str) -> None:
        self._request("DELETE", Endpoints.EVENT.format(id=event_id))

    # ==================== Showtimes ====================

    def create_showtime(self, data: ShowtimeCreateInput) -> Showtime:
        result = self._request("POST", Endpoints.SHOW_SHOWTIMES, json_data=data.to_api_dict(), expect_body=True)
        return Showtime.from_dict(result)

    def delete_showtime(self, showtime_id: str) -> None:
        self._request("DELETE", Endpoints.SHOWTIME.format(id=showtime_id))

    # ==================== Categories ====================

    def create_category(self, data: CategoryCreateInput) -> Category:
        result = self._request("POST", Endpoints.CATEGORIES, json_data=data.to_api_dict(), expect_body=True)
        return Category.from_dict(result)

    def delete_category(self, category_id: str) -> None:
        self._request("DELETE", Endpoints.CATEGORY.format(id=category_id))

    # ==================== Price Tiers ====================

    def create_price_tier(self, data: PriceTierSpec) -> PriceTier:
        result = self._request("POST", Endpoints.SHOW_SECTIONS, json_data=data.to_api_dict(), expect_body=True)
        return PriceTier.from_dict(result)

    def delete_price_tier(self, price_tier_id: str) -> None:
        self._request("DELETE", Endpoints.PRICE_TIER.format(id=price_tier_id))

    # ==================== Seat Sections ====================

    def create_seat_section(self, data: SeatSectionCreateInput) -> SeatSection:
        result = self._request("POST", Endpoints.SEAT_SECTIONS, json_data=data.to_api_dict(), expect_body=True)
        return SeatSection.from_dict(result)

    def delete_seat_section(self, seat_section_id: str) -> None:
        self._request("DELETE", Endpoints.SEAT_SECTION.format(id=seat_section_id))
