from __future__ import annotations

import logging
import re

from pr_annotator.errors import PatchUnresolved, ReferenceUnresolved
from pr_annotator.models import ChangedFile, HunkInfo

logger = logging.getLogger(__name__)

# Only the first "@@" line of a patch is considered; later hunks are ignored.
FIRST_HUNK_LINE = re.compile(r"^@@.*$", re.MULTILINE)
HUNK_HEADER = re.compile(r"^@@ -\d+(?:,\d+)? \+(?P<start>\d+)(?:,(?P<count>\d+))? @@")
COMMIT_REF = re.compile(r".+ref=(?P<ref>.+)")


def parse_first_hunk(patch: str | None, filename: str = "<patch>") -> tuple[int, int]:
    """Return ``(start, count)`` for the new-file side of the first hunk.

    A header that omits the new-side count describes a single line, as in
    unified diff. Raises ``PatchUnresolved`` when the patch has no hunk
    header or the first header's fields are not numeric.
    """
    line_match = FIRST_HUNK_LINE.search(patch or "")
    if line_match is None:
        raise PatchUnresolved(filename)

    header = HUNK_HEADER.match(line_match.group(0))
    if header is None:
        raise PatchUnresolved(filename)

    start = int(header.group("start"))
    count_text = header.group("count")
    count = int(count_text) if count_text is not None else 1
    return start, count


def resolve_commit_ref(url: str | None, filename: str = "<url>") -> str:
    match = COMMIT_REF.match(url or "")
    if match is None:
        raise ReferenceUnresolved(filename, url or "")
    return match.group("ref")


def build_hunk_info(changed_file: ChangedFile) -> HunkInfo:
    hunk_start, hunk_count = parse_first_hunk(changed_file.patch, changed_file.filename)
    sha = resolve_commit_ref(changed_file.contents_url, changed_file.filename)
    logger.debug(
        "Resolved %s: hunk start=%d count=%d ref=%s",
        changed_file.filename,
        hunk_start,
        hunk_count,
        sha,
    )
    return HunkInfo(
        filename=changed_file.filename,
        hunk_start=hunk_start,
        hunk_count=hunk_count,
        sha=sha,
    )
