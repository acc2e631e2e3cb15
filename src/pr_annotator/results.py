from __future__ import annotations

import json
from pathlib import Path

from pr_annotator.models import Finding, Location


class ResultsError(ValueError):
    pass


def load_results(path: str | Path) -> list[Finding]:
    """Read a scanner report with a top-level ``Results`` array.

    A missing file or malformed JSON raises the underlying error unchanged.
    """
    results_path = Path(path)
    with results_path.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)

    if not isinstance(raw, dict):
        raise ResultsError(f"Results file must contain an object: {results_path}")

    items = _field(raw, "Results")
    if items is None:
        return []
    if not isinstance(items, list):
        raise ResultsError("'Results' must be a list")

    findings: list[Finding] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ResultsError(f"Result #{index} must be an object")

        location = _field(item, "location")
        if not isinstance(location, dict):
            raise ResultsError(f"Result #{index} is missing 'location'")

        findings.append(
            Finding(
                rule_id=_str(_field(item, "rule_id")),
                rule_description=_str(_field(item, "rule_description")),
                rule_provider=_str(_field(item, "rule_provider")),
                link=_str(_field(item, "link")),
                location=Location(
                    filename=_str(_field(location, "filename")),
                    start_line=_int(_field(location, "start_line"), index),
                    end_line=_int(_field(location, "end_line"), index),
                ),
                description=_str(_field(item, "description")),
                severity=_str(_field(item, "severity")),
            )
        )

    return findings


def _str(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _int(value: object, index: int) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ResultsError(f"Result #{index} has a non-integer line number: {value!r}")
    try:
        return int(value)
    except ValueError as exc:
        raise ResultsError(f"Result #{index} has a non-integer line number: {value!r}") from exc


def _field(mapping: dict, name: str) -> object:
    # Scanner keys are matched case-insensitively ("Results" and "results" both work).
    if name in mapping:
        return mapping[name]
    wanted = name.lower()
    return next((value for key, value in mapping.items() if str(key).lower() == wanted), None)
