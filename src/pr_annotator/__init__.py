"""Map static-analysis findings onto the changed lines of a pull request."""

from __future__ import annotations

from pr_annotator.correlator import correlate, normalize_path
from pr_annotator.errors import AnnotationError, PatchUnresolved, ReferenceUnresolved
from pr_annotator.filtering import should_include
from pr_annotator.hunks import build_hunk_info, parse_first_hunk, resolve_commit_ref
from pr_annotator.models import Annotation, ChangedFile, Finding, HunkInfo, Location

__all__ = [
    "Annotation",
    "AnnotationError",
    "ChangedFile",
    "Finding",
    "HunkInfo",
    "Location",
    "PatchUnresolved",
    "ReferenceUnresolved",
    "build_hunk_info",
    "correlate",
    "normalize_path",
    "parse_first_hunk",
    "resolve_commit_ref",
    "should_include",
]
