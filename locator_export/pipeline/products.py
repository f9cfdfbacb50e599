"""Product resolution from per-product rollup date columns."""

from __future__ import annotations

from typing import Any, Iterable

from locator_export.common.models import ProductColumn
from locator_export.pipeline.properties import get_rollup_date


def resolve_products(properties: Any, product_columns: Iterable[ProductColumn]) -> tuple[str, ...]:
    # A store carries a product once any of its columns has a date, whatever the date is.
    carried: dict[str, None] = {}
    for column in product_columns:
        if get_rollup_date(properties, column.property) is not None:
            carried.setdefault(column.display_name, None)
    return tuple(carried)
