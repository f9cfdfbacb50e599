"""Total accessors over Notion page properties.

Every accessor returns ``None`` for a missing, mistyped or malformed property
instead of raising, so one oddly shaped record cannot abort an export.
"""

from __future__ import annotations

from typing import Any

from locator_export.common.models import StoreCoordinates


def _typed_property(properties: Any, name: str, expected_type: str | None = None) -> dict | None:
    if not isinstance(properties, dict):
        return None
    prop = properties.get(name)
    if not isinstance(prop, dict):
        return None
    if expected_type is not None and prop.get("type") != expected_type:
        return None
    return prop


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def join_plain_text(fragments: Any) -> str | None:
    if not isinstance(fragments, list):
        return None
    parts = []
    for fragment in fragments:
        if not isinstance(fragment, dict):
            continue
        text = fragment.get("plain_text")
        if isinstance(text, str):
            parts.append(text)
    return "".join(parts) or None


def get_title(properties: Any, name: str) -> str | None:
    prop = _typed_property(properties, name, "title")
    if prop is None:
        return None
    return join_plain_text(prop.get("title"))


def get_status(properties: Any, name: str) -> str | None:
    prop = _typed_property(properties, name, "status")
    if prop is None:
        return None
    status = prop.get("status")
    if not isinstance(status, dict):
        return None
    label = status.get("name")
    return label if isinstance(label, str) and label else None


def get_rich_text(properties: Any, name: str) -> str | None:
    prop = _typed_property(properties, name)
    if prop is None:
        return None
    return join_plain_text(prop.get("rich_text"))


def get_rollup_date(properties: Any, name: str) -> str | None:
    prop = _typed_property(properties, name, "rollup")
    if prop is None:
        return None
    rollup = prop.get("rollup")
    if not isinstance(rollup, dict) or rollup.get("type") != "date":
        return None
    date = rollup.get("date")
    if not isinstance(date, dict):
        return None
    start = date.get("start")
    return start if isinstance(start, str) and start else None


def get_place_coordinates(properties: Any, name: str) -> StoreCoordinates | None:
    prop = _typed_property(properties, name, "place")
    if prop is None:
        return None
    place = prop.get("place")
    if not isinstance(place, dict):
        return None
    lat = _as_number(place.get("lat"))
    lng = _as_number(place.get("lon"))
    if lat is None or lng is None:
        return None
    return StoreCoordinates(lat=lat, lng=lng)
