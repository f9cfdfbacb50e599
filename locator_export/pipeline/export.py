"""Store locator JSON export."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from locator_export.common.fs import dump_json, write_text
from locator_export.common.models import NormalizedStore
from locator_export.common.time_utils import utc_timestamp_iso

OUTPUT_FIELDS = [
    "id",
    "name",
    "address",
    "lat",
    "lng",
    "products",
    "lastDelivery",
]


def to_output_record(store: NormalizedStore) -> dict[str, Any]:
    coordinates = store.coordinates
    record = {
        "id": store.id,
        "name": store.name,
        "address": store.address,
        "lat": coordinates.lat if coordinates is not None else None,
        "lng": coordinates.lng if coordinates is not None else None,
        "products": list(store.products),
        "lastDelivery": store.last_delivery,
    }
    return {key: record[key] for key in OUTPUT_FIELDS}


def assemble_document(stores: Iterable[NormalizedStore], generated: datetime | None = None) -> dict[str, Any]:
    output_stores = [to_output_record(store) for store in stores]
    return {
        "generated": utc_timestamp_iso(generated),
        "count": len(output_stores),
        "stores": output_stores,
    }


def serialize_document(document: dict[str, Any]) -> str:
    return dump_json(document)


def write_export(path: Path, text: str) -> Path:
    write_text(path, text)
    return path
