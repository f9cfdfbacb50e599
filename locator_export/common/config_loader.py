"""Configuration loading: built-in defaults, optional YAML file, environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from locator_export.common.constants import (
    DEFAULT_DATABASE_ID,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PRODUCT_COLUMNS,
    DEFAULT_PROPERTY_NAMES,
    DEFAULT_VALID_ACCOUNT_STATUSES,
    ENV_API_TOKEN,
    ENV_DATABASE_ID,
)
from locator_export.common.errors import ConfigurationError
from locator_export.common.fs import read_yaml
from locator_export.common.http import TimeoutConfig
from locator_export.common.models import ProductColumn, PropertyNames
from locator_export.common.schema import validate_export_config


@dataclass(frozen=True)
class ExportConfig:
    api_token: str
    database_id: str
    page_size: int
    valid_account_statuses: tuple[str, ...]
    product_columns: tuple[ProductColumn, ...]
    property_names: PropertyNames
    output_path: Path
    timeout: TimeoutConfig


def default_config_values() -> dict:
    return {
        "database_id": DEFAULT_DATABASE_ID,
        "page_size": DEFAULT_PAGE_SIZE,
        "valid_account_statuses": list(DEFAULT_VALID_ACCOUNT_STATUSES),
        "product_columns": [
            {"property": prop, "display_name": display} for prop, display in DEFAULT_PRODUCT_COLUMNS
        ],
        "properties": dict(DEFAULT_PROPERTY_NAMES),
        "output_path": DEFAULT_OUTPUT_PATH,
        "http": {"connect_timeout": TimeoutConfig.connect, "read_timeout": TimeoutConfig.read},
    }


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_file(path: Path) -> dict:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        loaded = read_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return loaded


def load_export_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    output_path: Path | None = None,
) -> ExportConfig:
    env = os.environ if environ is None else environ

    api_token = (env.get(ENV_API_TOKEN) or "").strip()
    if not api_token:
        raise ConfigurationError(f"{ENV_API_TOKEN} environment variable is required")

    file_values = validate_export_config(_load_yaml_file(config_path)) if config_path is not None else {}
    values = _deep_merge(default_config_values(), file_values)

    database_id = (env.get(ENV_DATABASE_ID) or "").strip() or values["database_id"]

    return ExportConfig(
        api_token=api_token,
        database_id=database_id,
        page_size=int(values["page_size"]),
        valid_account_statuses=tuple(values["valid_account_statuses"]),
        product_columns=tuple(
            ProductColumn(property=column["property"], display_name=column["display_name"])
            for column in values["product_columns"]
        ),
        property_names=PropertyNames(**values["properties"]),
        output_path=output_path or Path(values["output_path"]),
        timeout=TimeoutConfig(
            connect=float(values["http"]["connect_timeout"]),
            read=float(values["http"]["read_timeout"]),
        ),
    )
