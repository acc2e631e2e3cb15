from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from pr_annotator.models import Settings

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_RESULTS_PATH = "results.json"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"


class ConfigError(ValueError):
    pass


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    results_path: str | None = None,
    workspace: str | None = None,
    repository: str | None = None,
    pull_request_number: int | str | None = None,
    api_url: str | None = None,
    token_env: str | None = None,
) -> Settings:
    """Build run settings from GitHub Actions variables; keyword arguments win."""
    env = os.environ if environ is None else environ

    repo = _optional_str(repository) or _optional_str(env.get("GITHUB_REPOSITORY"))
    if not repo:
        raise ConfigError("Repository is required (--repository or GITHUB_REPOSITORY)")
    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        raise ConfigError(f"Repository must look like 'owner/repo': {repo!r}")

    number = pull_request_number
    if number is None:
        number = _optional_str(env.get("PR_NUMBER"))
    if number is None:
        event_path = _optional_str(env.get("GITHUB_EVENT_PATH"))
        if event_path:
            number = pull_request_number_from_event(event_path)
    if number is None:
        raise ConfigError("Pull request number is required (--pr, PR_NUMBER or GITHUB_EVENT_PATH)")

    return Settings(
        results_path=resolve_results_path(results_path, env),
        workspace=_optional_str(workspace) or _optional_str(env.get("GITHUB_WORKSPACE")) or "",
        repository=repo,
        pull_request_number=_positive_int(number),
        api_url=_optional_str(api_url) or _optional_str(env.get("GITHUB_API_URL")) or DEFAULT_API_URL,
        token_env=_optional_str(token_env) or DEFAULT_TOKEN_ENV,
    )


def resolve_results_path(value: str | None, environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    return (
        _optional_str(value)
        or _optional_str(env.get("PR_ANNOTATOR_RESULTS"))
        or DEFAULT_RESULTS_PATH
    )


def pull_request_number_from_event(path: str | Path) -> int | None:
    event_path = Path(path)
    if not event_path.exists():
        raise ConfigError(f"Event file not found: {event_path}")

    with event_path.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)

    if not isinstance(raw, dict):
        raise ConfigError("Event payload must be an object")

    pull_request = raw.get("pull_request")
    if isinstance(pull_request, dict) and pull_request.get("number") is not None:
        return _positive_int(pull_request["number"])
    if raw.get("number") is not None:
        return _positive_int(raw["number"])
    return None


def _positive_int(value: object) -> int:
    try:
        number = int(str(value).strip())
    except ValueError as exc:
        raise ConfigError(f"Pull request number must be an integer: {value!r}") from exc
    if number <= 0:
        raise ConfigError(f"Pull request number must be positive: {number}")
    return number


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
