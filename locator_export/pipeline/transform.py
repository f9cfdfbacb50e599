"""Notion page to NormalizedStore transformation."""

from __future__ import annotations

from typing import Any

from locator_export.common.config_loader import ExportConfig
from locator_export.common.models import NormalizedStore
from locator_export.pipeline.products import resolve_products
from locator_export.pipeline.properties import (
    get_place_coordinates,
    get_rich_text,
    get_rollup_date,
    get_status,
    get_title,
)


def format_address(street: str | None, city: str | None) -> str | None:
    if street and city:
        return f"{street}, {city}"
    return street or city or None


def transform_page(page: dict[str, Any], config: ExportConfig) -> NormalizedStore:
    names = config.property_names
    props = page.get("properties")
    if not isinstance(props, dict):
        props = {}

    page_id = page.get("id")

    return NormalizedStore(
        id=page_id if isinstance(page_id, str) else str(page_id or ""),
        name=get_title(props, names.name),
        address=format_address(get_rich_text(props, names.address), get_rich_text(props, names.city)),
        status=get_status(props, names.status),
        last_order_date=get_rollup_date(props, names.last_order_date),
        last_delivery_date=get_rollup_date(props, names.last_delivery_date),
        coordinates=get_place_coordinates(props, names.map_location),
        products=resolve_products(props, config.product_columns),
    )


def transform_pages(pages: list[dict[str, Any]], config: ExportConfig) -> list[NormalizedStore]:
    return [transform_page(page, config) for page in pages]
