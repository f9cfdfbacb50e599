"""Filesystem helpers."""

from __future__ import annotations

import json
from pathlib import Path

from locator_export.common.errors import WriteError


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_yaml(path: Path):
    import yaml

    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def dump_json(payload) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def write_text(path: Path, text: str) -> None:
    try:
        ensure_dir(path.parent)
        with path.open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        raise WriteError(f"Could not write {path}: {exc}") from exc
