"""Publishability rules for store locator output."""

from __future__ import annotations

from typing import Iterable

from locator_export.common.models import NormalizedStore


def is_publishable(store: NormalizedStore, valid_statuses: Iterable[str]) -> bool:
    if not store.name:
        return False
    # Coordinates are all-or-nothing, so 0.0 on either axis still counts as present.
    if store.coordinates is None:
        return False
    return store.status in set(valid_statuses)


def filter_stores(stores: Iterable[NormalizedStore], valid_statuses: Iterable[str]) -> list[NormalizedStore]:
    allowed = tuple(valid_statuses)
    return [store for store in stores if is_publishable(store, allowed)]
