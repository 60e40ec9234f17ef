# -*- coding: utf-8 -*-
"""
Show entity model and its create/update/publish payloads.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from .base import from_api, compact


@dataclass
class Show:
    """Show as returned by the resource API."""

    id: str = ""
    title: str = ""
    description: Optional[str] = None
    duration: int = 0
    venue_id: str = ""
    subtitle: Optional[str] = None
    language: Optional[str] = None
    age_limit: Optional[int] = None
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_active: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Show":
        """Create Show from an API dictionary."""
        return from_api(cls, data, {
            "venueId": "venue_id",
            "ageLimit": "age_limit",
            "imageUrl": "image_url",
            "thumbnailUrl": "thumbnail_url",
            "isActive": "is_active",
        })


@dataclass
class ShowCreateInput:
    """Payload for creating a show (Show Details step)."""

    title: str
    duration: int
    venue_id: str
    description: Optional[str] = None
    subtitle: Optional[str] = None
    language: Optional[str] = None
    age_limit: Optional[int] = None
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_active: bool = False
    category_ids: List[str] = field(default_factory=list)

    def to_api_dict(self) -> Dict[str, Any]:
        return compact({
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
            "imageUrl": self.image_url,
            "thumbnailUrl": self.thumbnail_url,
            "duration": self.duration,
            "ageLimit": self.age_limit,
            "language": self.language,
            "venueId": self.venue_id,
            "isActive": self.is_active,
            "categoryIds": self.category_ids or None,
        })


@dataclass
class ShowUpdateInput:
    """
    Partial update of show details.

    Only fields that were given are sent; the rest stay as they are on the
    server.
    """

    title: Optional[str] = None
    duration: Optional[int] = None
    venue_id: Optional[str] = None
    description: Optional[str] = None
    subtitle: Optional[str] = None
    language: Optional[str] = None
    age_limit: Optional[int] = None
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_api_dict(self) -> Dict[str, Any]:
        return compact({
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
            "imageUrl": self.image_url,
            "thumbnailUrl": self.thumbnail_url,
            "duration": self.duration,
            "ageLimit": self.age_limit,
            "language": self.language,
            "venueId": self.venue_id,
        })


@dataclass(frozen=True)
class PublishShowInput:
    """Payload for the publish call: flips the show's active flag."""

    is_active: bool = True

    def to_api_dict(self) -> Dict[str, Any]:
        return {"isActive": self.is_active}
