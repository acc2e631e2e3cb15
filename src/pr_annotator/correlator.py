from __future__ import annotations

import logging
from collections.abc import Sequence

from pr_annotator.filtering import should_include
from pr_annotator.hunks import build_hunk_info
from pr_annotator.models import Annotation, ChangedFile, Finding

logger = logging.getLogger(__name__)


def normalize_path(path: str, workspace: str | None) -> str:
    """Strip the ``<workspace>/`` prefix so scanner paths compare to PR paths."""
    root = (workspace or "").rstrip("/")
    if not root:
        return path
    prefix = f"{root}/"
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


def correlate(
    findings: Sequence[Finding],
    changed_files: Sequence[ChangedFile],
    workspace: str | None,
) -> list[Annotation]:
    """Build one annotation per finding that lies inside a changed file's first hunk.

    Parser failures on any matched file propagate and no annotations are returned.
    """
    annotations: list[Annotation] = []

    for finding in findings:
        location = finding.location
        filename = normalize_path(location.filename, workspace)

        for changed_file in changed_files:
            if filename != changed_file.filename:
                continue

            info = build_hunk_info(changed_file)
            if not should_include(location.start_line, info.hunk_start, info.hunk_count):
                logger.debug(
                    "Skipping %s %s:%d, outside hunk %d..%d",
                    finding.rule_id,
                    filename,
                    location.start_line,
                    info.hunk_start,
                    info.hunk_start + info.hunk_count,
                )
                continue

            annotations.append(
                Annotation(
                    filename=info.filename,
                    start_line=location.start_line,
                    end_line=location.end_line,
                    position=location.start_line - info.hunk_start,
                    sha=info.sha,
                    code=finding.rule_id,
                    description=finding.description,
                    provider=finding.rule_provider,
                )
            )

    logger.info(
        "Correlated %d findings against %d changed files: %d annotations",
        len(findings),
        len(changed_files),
        len(annotations),
    )
    return annotations
