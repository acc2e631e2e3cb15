from __future__ import annotations

import json
from pathlib import Path

from pr_annotator.models import ChangedFile
from pr_annotator.providers.base import PullRequestProvider
from pr_annotator.providers.github import _to_changed_file


class LocalProvider(PullRequestProvider):
    """Serve a pull request's file list from a saved ``pulls/{n}/files`` response."""

    def __init__(self, files_path: str | Path):
        self.files_path = Path(files_path)

    def list_files(self, pull_request_number: int | None = None) -> list[ChangedFile]:
        if not self.files_path.exists():
            raise RuntimeError(f"Changed files list does not exist: {self.files_path}")

        with self.files_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)

        if not isinstance(raw, list):
            raise RuntimeError(f"Changed files list must be a JSON array: {self.files_path}")

        files: list[ChangedFile] = []
        for item in raw:
            changed = _to_changed_file(item)
            if changed:
                files.append(changed)
        return files
