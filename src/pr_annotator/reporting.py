from __future__ import annotations

import csv
import json
import os
from collections.abc import Sequence
from dataclasses import fields
from pathlib import Path

from pr_annotator.models import Annotation

ANNOTATION_FIELDS = [item.name for item in fields(Annotation)]


def write_annotations(output_dir: str | Path, annotations: Sequence[Annotation]) -> Path:
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    rows = [item.to_dict() for item in annotations]
    json_path = out_dir / "annotations.json"
    csv_path = out_dir / "annotations.csv"
    json_tmp = json_path.with_name(json_path.name + ".tmp")
    csv_tmp = csv_path.with_name(csv_path.name + ".tmp")

    # Both files land together or not at all.
    try:
        _write_json(json_tmp, {"annotations": rows})
        _write_csv(csv_tmp, rows)
    except Exception:
        json_tmp.unlink(missing_ok=True)
        csv_tmp.unlink(missing_ok=True)
        raise

    os.replace(json_tmp, json_path)
    os.replace(csv_tmp, csv_path)
    return out_dir.resolve()


def _write_json(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=True)


def _write_csv(path: Path, rows: list[dict]) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=ANNOTATION_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
