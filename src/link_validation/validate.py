from __future__ import annotations
import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from src.config.logger_config import configure_logging, logger
from src.config.settings import ValidatorSettings, load_settings
from src.link_validation.application.reporter import ProgressReporter
from src.link_validation.application.workflows.validate_links import (
    ValidateLinksWorkflow,
    ValidateWorkflowConfig,
)
from src.link_validation.domain.errors import LinkValidationError
from src.link_validation.domain.models import RunSummary
from src.link_validation.infrastructure.dataset_loader import JsonDatasetLoader
from src.link_validation.infrastructure.http_prober import HttpProber


def build_workflow_config(settings: ValidatorSettings) -> ValidateWorkflowConfig:
    return ValidateWorkflowConfig(
        max_concurrency=settings.max_concurrency,
        request_timeout_ms=settings.request_timeout_ms,
        max_redirects=settings.max_redirects,
        batch_size=settings.batch_size,
        batch_pause_ms=settings.batch_pause_ms,
        min_start_interval_ms=settings.min_start_interval_ms,
        base_url=settings.base_url,
    )


async def run_validation_async(
    *,
    dataset_path: str | Path | None = None,
    settings: ValidatorSettings | None = None,
    reporter: ProgressReporter | None = None,
    show_progress: bool = True,
) -> RunSummary:
    settings = settings or load_settings()
    path = Path(dataset_path) if dataset_path is not None else settings.dataset_path
    # input errors abort here, before any session is opened
    records = JsonDatasetLoader(path).load()
    logger.info("Loaded {} records from {}", len(records), path)

    workflow = ValidateLinksWorkflow(
        prober=HttpProber(),
        progress=reporter or ProgressReporter(enabled=show_progress),
        config=build_workflow_config(settings),
    )
    return await workflow.run(records)


def run_validation(
    *,
    dataset_path: str | Path | None = None,
    settings: ValidatorSettings | None = None,
    reporter: ProgressReporter | None = None,
    show_progress: bool = True,
) -> RunSummary:
    return asyncio.run(
        run_validation_async(
            dataset_path=dataset_path,
            settings=settings,
            reporter=reporter,
            show_progress=show_progress,
        )
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.link_validation",
        description="Check that every galaxy in the dataset links to a reachable wiki page.",
    )
    parser.add_argument("--dataset", help="Path to the dataset JSON file.")
    parser.add_argument("--base-url", help="Wiki base the galaxy name is appended to.")
    parser.add_argument("--no-progress", action="store_true", help="Suppress progress output.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    reporter = ProgressReporter(enabled=not args.no_progress)

    try:
        settings = load_settings()
        configure_logging(settings.log_level, settings.log_dir)
        if args.base_url:
            settings = replace(settings, base_url=args.base_url)
        summary = run_validation(dataset_path=args.dataset, settings=settings, reporter=reporter)
    except LinkValidationError as exc:
        logger.error("Link validation aborted: {}", exc)
        print(str(exc), file=sys.stderr)
        return 1
    except Exception as exc:
        logger.exception("Unexpected error during link validation")
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return 1

    if summary.is_success:
        logger.info("All {} links valid", summary.total)
        reporter.report_success(summary)
        return 0

    logger.warning("{} of {} links invalid", summary.invalid_count, summary.total)
    reporter.report_failures(summary.invalid)
    return 1
