# -*- coding: utf-8 -*-
"""
Shared helpers for mapping resource API payloads onto dataclass models.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional


def from_api(cls, data: Dict[str, Any], field_mapping: Dict[str, str]):
    """
    Build a dataclass instance from an API dictionary.

    Maps camelCase API field names onto dataclass field names and drops
    anything the dataclass does not declare.
    """
    mapped_data = {}
    for api_field, value in data.items():
        dataclass_field = field_mapping.get(api_field, api_field)
        mapped_data[dataclass_field] = value

    return cls(**{k: v for k, v in mapped_data.items() if k in cls.__dataclass_fields__})


def to_wire(value: Any) -> Any:
    """Convert a Python value into its JSON representation."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset (None) fields and convert values for the wire."""
    return {k: to_wire(v) for k, v in payload.items() if v is not None}


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()
