"""Paginated Notion database query."""

from __future__ import annotations

import logging
import time

from locator_export.common.config_loader import ExportConfig
from locator_export.common.constants import NOTION_API_BASE, NOTION_VERSION
from locator_export.common.errors import TransportError
from locator_export.common.http import HttpClient
from locator_export.common.logging import log_event


def query_url(database_id: str) -> str:
    return f"{NOTION_API_BASE}/databases/{database_id}/query"


def notion_headers(api_token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {api_token}",
        "Notion-Version": NOTION_VERSION,
    }


def _query_body(page_size: int, cursor: str | None) -> dict:
    body: dict = {"page_size": page_size}
    if cursor is not None:
        body["start_cursor"] = cursor
    return body


def fetch_all_pages(
    config: ExportConfig,
    *,
    http_client: HttpClient | None = None,
    logger: logging.Logger | None = None,
    run_id: str | None = None,
) -> list[dict]:
    """Return every page of the database in the order the API returned them."""
    url = query_url(config.database_id)
    headers = notion_headers(config.api_token)
    pages: list[dict] = []
    cursor: str | None = None
    has_more = True
    request_count = 0

    owns_client = http_client is None
    client = http_client or HttpClient(timeout=config.timeout)
    try:
        while has_more:
            started = time.monotonic()
            payload = client.post_json(url, json_body=_query_body(config.page_size, cursor), headers=headers)
            request_count += 1

            results = payload.get("results") or []
            pages.extend(result for result in results if isinstance(result, dict))
            has_more = bool(payload.get("has_more"))
            cursor = payload.get("next_cursor")

            if logger is not None:
                log_event(
                    logger,
                    f"Fetched {len(pages)} pages...",
                    run_id=run_id,
                    stage="fetch",
                    event="PAGE_FETCHED",
                    status="ok",
                    page=request_count,
                    duration_ms=int((time.monotonic() - started) * 1000),
                    rows_in=len(results),
                    rows_out=len(pages),
                )

            if has_more and not cursor:
                raise TransportError(
                    f"Query for database {config.database_id} reported more results without a next_cursor"
                )
    finally:
        if owns_client:
            client.close()

    return pages
