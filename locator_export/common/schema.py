"""Minimal strict schema for the export YAML config."""

from __future__ import annotations

from locator_export.common.constants import DEFAULT_PROPERTY_NAMES, MAX_PAGE_SIZE
from locator_export.common.errors import ConfigurationError

TOP_LEVEL_KEYS = {
    "database_id",
    "page_size",
    "valid_account_statuses",
    "product_columns",
    "properties",
    "output_path",
    "http",
}
HTTP_KEYS = {"connect_timeout", "read_timeout"}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigurationError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigurationError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_mapping(value: object, ctx: str) -> None:
    if not isinstance(value, dict):
        raise ConfigurationError(f"{ctx} must be a mapping")


def _assert_non_empty_string(value: object, ctx: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{ctx} must be a non-empty string")


def _assert_positive_number(value: object, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigurationError(f"{ctx} must be a positive number")


def validate_export_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "export config")
    _assert_no_unknown_keys(cfg, TOP_LEVEL_KEYS, "export config", allow_unknown)

    if "database_id" in cfg:
        _assert_non_empty_string(cfg["database_id"], "database_id")

    if "page_size" in cfg:
        page_size = cfg["page_size"]
        if isinstance(page_size, bool) or not isinstance(page_size, int) or not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ConfigurationError(f"page_size must be an integer between 1 and {MAX_PAGE_SIZE}")

    if "valid_account_statuses" in cfg:
        statuses = cfg["valid_account_statuses"]
        if not isinstance(statuses, list) or not statuses:
            raise ConfigurationError("valid_account_statuses must be a non-empty list")
        for idx, status in enumerate(statuses):
            _assert_non_empty_string(status, f"valid_account_statuses[{idx}]")

    if "product_columns" in cfg:
        columns = cfg["product_columns"]
        if not isinstance(columns, list):
            raise ConfigurationError("product_columns must be a list")
        for idx, column in enumerate(columns):
            ctx = f"product_columns[{idx}]"
            _assert_mapping(column, ctx)
            _assert_required_keys(column, {"property", "display_name"}, ctx)
            _assert_no_unknown_keys(column, {"property", "display_name"}, ctx, allow_unknown)
            _assert_non_empty_string(column["property"], f"{ctx}.property")
            _assert_non_empty_string(column["display_name"], f"{ctx}.display_name")

    if "properties" in cfg:
        _assert_mapping(cfg["properties"], "properties")
        _assert_no_unknown_keys(cfg["properties"], set(DEFAULT_PROPERTY_NAMES), "properties", allow_unknown)
        for key, value in cfg["properties"].items():
            _assert_non_empty_string(value, f"properties.{key}")

    if "output_path" in cfg:
        _assert_non_empty_string(cfg["output_path"], "output_path")

    if "http" in cfg:
        _assert_mapping(cfg["http"], "http")
        _assert_no_unknown_keys(cfg["http"], HTTP_KEYS, "http", allow_unknown)
        for key in HTTP_KEYS & set(cfg["http"]):
            _assert_positive_number(cfg["http"][key], f"http.{key}")

    return cfg
