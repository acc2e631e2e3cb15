from __future__ import annotations

from pathlib import Path

from pr_annotator.models import Settings
from pr_annotator.providers.base import PullRequestProvider
from pr_annotator.providers.github import GitHubProvider
from pr_annotator.providers.local import LocalProvider

__all__ = ["GitHubProvider", "LocalProvider", "PullRequestProvider", "build_provider"]


def build_provider(settings: Settings | None, files_path: str | Path | None = None) -> PullRequestProvider:
    if files_path:
        return LocalProvider(files_path)
    if settings is None:
        raise ValueError("GitHub provider requires settings")
    return GitHubProvider(settings)
