from __future__ import annotations

import logging
import os
from urllib.parse import urlencode

from pr_annotator.http import USER_AGENT, get_json
from pr_annotator.models import ChangedFile, Settings
from pr_annotator.providers.base import PullRequestProvider

logger = logging.getLogger(__name__)


class GitHubProvider(PullRequestProvider):
    def __init__(self, settings: Settings):
        self.settings = settings
        if "/" not in settings.repository:
            raise ValueError("GitHub provider requires 'repository' as owner/repo")
        self.base_url = (settings.api_url or "https://api.github.com").rstrip("/")

    def list_files(self, pull_request_number: int) -> list[ChangedFile]:
        token = _token_from_env(self.settings.token_env)
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        files: list[ChangedFile] = []
        per_page = 100
        page = 1
        base = (
            f"{self.base_url}/repos/{self.settings.owner}/{self.settings.repo}"
            f"/pulls/{int(pull_request_number)}/files"
        )

        url: str | None = f"{base}?{urlencode({'per_page': per_page, 'page': page})}"
        while url:
            response = get_json(url, headers=headers)
            page_data = response.data
            if not isinstance(page_data, list):
                raise RuntimeError("GitHub API returned invalid pull request files payload")

            for item in page_data:
                changed = _to_changed_file(item)
                if changed:
                    files.append(changed)

            # Prefer the Link header; without one, a short page is the last page.
            url = response.next_url
            if url is None and len(page_data) >= per_page:
                page += 1
                url = f"{base}?{urlencode({'per_page': per_page, 'page': page})}"

        logger.info(
            "Listed %d changed files for %s#%d",
            len(files),
            self.settings.repository,
            pull_request_number,
        )
        return files


def _to_changed_file(item: object) -> ChangedFile | None:
    if not isinstance(item, dict):
        return None
    filename = str(item.get("filename") or "").strip()
    if not filename:
        return None

    # Binary files and pure renames come back without a patch.
    return ChangedFile(
        filename=filename,
        patch=str(item.get("patch") or ""),
        contents_url=str(item.get("contents_url") or ""),
    )


def _token_from_env(token_env: str | None) -> str | None:
    if not token_env:
        return None
    token = os.getenv(token_env)
    if token:
        return token.strip()
    return None
