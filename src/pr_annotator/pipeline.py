from __future__ import annotations

import logging
from pathlib import Path

from pr_annotator.correlator import correlate
from pr_annotator.models import Annotation, CorrelationSummary, Settings
from pr_annotator.providers import build_provider
from pr_annotator.providers.base import PullRequestProvider
from pr_annotator.reporting import write_annotations
from pr_annotator.results import load_results

logger = logging.getLogger(__name__)


def run_annotate(
    settings: Settings,
    *,
    output_dir: str | Path | None = None,
) -> tuple[list[Annotation], CorrelationSummary]:
    provider = build_provider(settings)
    return run_correlation(
        results_path=settings.results_path,
        provider=provider,
        pull_request_number=settings.pull_request_number,
        workspace=settings.workspace,
        output_dir=output_dir,
    )


def run_correlation(
    *,
    results_path: str | Path,
    provider: PullRequestProvider,
    pull_request_number: int | None,
    workspace: str | None,
    output_dir: str | Path | None = None,
) -> tuple[list[Annotation], CorrelationSummary]:
    """Load findings, list changed files and correlate them.

    Any failure propagates before output is written, so a failed run never
    leaves partial annotation files behind.
    """
    findings = load_results(results_path)
    logger.info("Loaded %d findings from %s", len(findings), results_path)

    changed_files = provider.list_files(pull_request_number)
    annotations = correlate(findings, changed_files, workspace)

    written_dir = None
    if output_dir is not None:
        written_dir = str(write_annotations(output_dir, annotations))

    summary = CorrelationSummary(
        findings_count=len(findings),
        changed_files_count=len(changed_files),
        annotations_count=len(annotations),
        status="SUCCESS",
        output_dir=written_dir,
    )
    return annotations, summary
