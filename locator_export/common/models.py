"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StoreCoordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class ProductColumn:
    property: str
    display_name: str


@dataclass(frozen=True)
class PropertyNames:
    name: str
    status: str
    address: str
    city: str
    last_order_date: str
    last_delivery_date: str
    map_location: str


@dataclass(frozen=True)
class NormalizedStore:
    id: str
    name: str | None = None
    address: str | None = None
    status: str | None = None
    last_order_date: str | None = None
    last_delivery_date: str | None = None
    coordinates: StoreCoordinates | None = None
    products: tuple[str, ...] = ()

    @property
    def last_delivery(self) -> str | None:
        # Delivery date wins whenever present, regardless of which is newer.
        return self.last_delivery_date or self.last_order_date


@dataclass(frozen=True)
class RecentCustomer:
    name: str
    last_order: str
    lat: float
    lng: float


@dataclass(frozen=True)
class AnalysisReport:
    total_records: int
    status_counts: list[tuple[str, int]]
    with_coordinates: int
    with_orders: int
    customers_with_coordinates: int
    recent_customers: list[RecentCustomer] = field(default_factory=list)
