from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Location:
    filename: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class Finding:
    rule_id: str
    rule_description: str
    rule_provider: str
    link: str
    location: Location
    description: str
    severity: str


@dataclass(frozen=True)
class ChangedFile:
    filename: str
    patch: str
    contents_url: str


@dataclass(frozen=True)
class HunkInfo:
    filename: str
    hunk_start: int
    hunk_count: int
    sha: str


@dataclass(frozen=True)
class Annotation:
    filename: str
    start_line: int
    end_line: int
    position: int
    sha: str
    code: str
    description: str
    provider: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Settings:
    results_path: str
    workspace: str
    repository: str
    pull_request_number: int
    api_url: str = "https://api.github.com"
    token_env: str | None = "GITHUB_TOKEN"

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/", 1)[1]


@dataclass(frozen=True)
class CorrelationSummary:
    findings_count: int
    changed_files_count: int
    annotations_count: int
    status: str
    output_dir: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
