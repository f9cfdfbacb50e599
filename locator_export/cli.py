"""CLI entrypoint for the store locator Notion export."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Mapping, TextIO

from locator_export.common.config_loader import ExportConfig, load_export_config
from locator_export.common.constants import (
    COMMANDS,
    EXIT_HARD_FAIL,
    EXIT_SUCCESS,
    OUTPUT_END_MARKER,
    OUTPUT_START_MARKER,
)
from locator_export.common.errors import PipelineError
from locator_export.common.http import HttpClient
from locator_export.common.ids import generate_run_id
from locator_export.common.logging import build_logger, log_event
from locator_export.fetch.notion_fetch import fetch_all_pages
from locator_export.pipeline.analysis import build_analysis_report, format_analysis_report
from locator_export.pipeline.export import assemble_document, serialize_document, write_export
from locator_export.pipeline.filter import filter_stores
from locator_export.pipeline.transform import transform_pages


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--config", default=None, help="Optional YAML config file")
    parser.add_argument("--output", default=None, help="Export file path (overrides config)")
    parser.add_argument("--no-echo", dest="echo", action="store_false", help="Do not echo the export to stdout")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def run_export(
    config: ExportConfig,
    *,
    logger: logging.Logger,
    run_id: str,
    echo: bool = True,
    stdout: TextIO | None = None,
    http_client: HttpClient | None = None,
) -> dict:
    log_event(
        logger,
        f"Starting Notion export for database {config.database_id}; "
        f"account status in [{', '.join(config.valid_account_statuses)}]; map location required",
        run_id=run_id,
        stage="export",
        event="STAGE_START",
        status="ok",
    )

    pages = fetch_all_pages(config, http_client=http_client, logger=logger, run_id=run_id)
    stores = transform_pages(pages, config)
    publishable = filter_stores(stores, config.valid_account_statuses)
    log_event(
        logger,
        f"Stores after filtering: {len(publishable)}",
        run_id=run_id,
        stage="filter",
        event="FILTER_DONE",
        status="ok",
        rows_in=len(stores),
        rows_out=len(publishable),
    )

    document = assemble_document(publishable)
    text = serialize_document(document)

    if echo:
        out = stdout or sys.stdout
        out.write(f"{OUTPUT_START_MARKER}\n{text}{OUTPUT_END_MARKER}\n")
        out.flush()

    path = write_export(config.output_path, text)
    log_event(
        logger,
        f"Written to: {path}",
        run_id=run_id,
        stage="write",
        event="EXPORT_WRITTEN",
        status="ok",
        rows_out=document["count"],
    )
    return document


def run_analysis(
    config: ExportConfig,
    *,
    logger: logging.Logger,
    run_id: str,
    stdout: TextIO | None = None,
    http_client: HttpClient | None = None,
) -> None:
    pages = fetch_all_pages(config, http_client=http_client, logger=logger, run_id=run_id)
    report = build_analysis_report(pages, config.property_names)
    out = stdout or sys.stdout
    for line in format_analysis_report(report):
        out.write(line + "\n")
    out.flush()


def run_command(
    args: argparse.Namespace,
    *,
    environ: Mapping[str, str] | None = None,
    stdout: TextIO | None = None,
) -> int:
    run_id = args.run_id or generate_run_id()
    log_dir = Path(args.log_dir) if args.log_dir else None
    logger = build_logger(run_id, log_dir=log_dir, level=args.log_level)

    try:
        config = load_export_config(
            Path(args.config) if args.config else None,
            environ=environ,
            output_path=Path(args.output) if args.output else None,
        )
        if args.command == "export":
            run_export(config, logger=logger, run_id=run_id, echo=args.echo, stdout=stdout)
        elif args.command == "analyze":
            run_analysis(config, logger=logger, run_id=run_id, stdout=stdout)
        else:
            raise ValueError(f"Unknown command: {args.command}")
    except PipelineError as exc:
        log_event(
            logger,
            f"{args.command} failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            stage=args.command,
            event="RUN_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL
    except Exception as exc:
        log_event(
            logger,
            f"unexpected failure during {args.command}: {exc!r}",
            level=logging.ERROR,
            run_id=run_id,
            stage=args.command,
            event="RUN_FAIL",
            status="error",
            error_code="UNEXPECTED_ERROR",
        )
        return EXIT_HARD_FAIL

    log_event(logger, f"{args.command} finished", run_id=run_id, stage=args.command, event="RUN_END", status="ok")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
