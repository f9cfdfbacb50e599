from locator_export.common.config_loader import load_export_config
from locator_export.common.models import StoreCoordinates
from locator_export.pipeline.export import to_output_record
from locator_export.pipeline.transform import format_address, transform_page


def _config():
    return load_export_config(environ={"NOTION_API_TOKEN": "secret-token"})


def _rich_text(value):
    return {"type": "rich_text", "rich_text": [{"plain_text": value}] if value else []}


def _rollup(start):
    return {"type": "rollup", "rollup": {"type": "date", "date": {"start": start} if start else None}}


def test_acme_scenario_matches_expected_output_record():
    page = {
        "id": "page-acme",
        "properties": {
            "Dispensary Name": {"type": "title", "title": [{"plain_text": "Acme"}]},
            "Account Status": {"type": "status", "status": {"name": "Customer"}},
            "Map Location": {"type": "place", "place": {"lat": 37.0, "lon": -122.0}},
            "Last Order Date": _rollup("2024-01-01"),
            "Last Delivery Date": _rollup(None),
        },
    }

    store = transform_page(page, _config())

    assert store.status == "Customer"
    assert store.coordinates == StoreCoordinates(37.0, -122.0)
    assert to_output_record(store) == {
        "id": "page-acme",
        "name": "Acme",
        "address": None,
        "lat": 37.0,
        "lng": -122.0,
        "products": [],
        "lastDelivery": "2024-01-01",
    }


def test_address_joins_street_and_city():
    page = {"id": "p1", "properties": {"Address": _rich_text("1 Main St"), "City": _rich_text("Oakland")}}

    assert transform_page(page, _config()).address == "1 Main St, Oakland"


def test_empty_address_rich_text_is_absent():
    page = {"id": "p1", "properties": {"Address": _rich_text(None), "City": _rich_text(None)}}

    assert transform_page(page, _config()).address is None


def test_format_address_uses_whichever_part_is_present():
    assert format_address("1 Main St", None) == "1 Main St"
    assert format_address(None, "Oakland") == "Oakland"
    assert format_address(None, None) is None


def test_products_and_dates_flow_through():
    page = {
        "id": "p2",
        "properties": {
            "SMACK 1G": _rollup("2024-03-01"),
            "SMACK .5G": _rollup("2024-03-02"),
            "O-Yeah 1G Customer": _rollup("2024-03-03"),
            "Last Order Date": _rollup("2024-03-01"),
            "Last Delivery Date": _rollup("2024-02-01"),
        },
    }

    store = transform_page(page, _config())

    assert store.products == ("O-Yeah", "SMACK")
    # Delivery date is preferred even when the order date is newer.
    assert store.last_delivery == "2024-02-01"


def test_page_without_properties_degrades_to_absent_fields():
    store = transform_page({"id": "p3", "properties": "garbage"}, _config())

    assert store.id == "p3"
    assert store.name is None
    assert store.coordinates is None
    assert store.products == ()
