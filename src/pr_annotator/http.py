from __future__ import annotations

import json
import logging
import os
import re
import ssl
from dataclasses import dataclass
from typing import Any
from urllib import error, request

import certifi

logger = logging.getLogger(__name__)

USER_AGENT = "pr-annotator/0.1"

LINK_NEXT = re.compile(r'<(?P<url>[^>]+)>\s*;\s*rel="?next"?')


@dataclass(frozen=True)
class HttpResponse:
    status: int
    headers: dict[str, str]
    data: Any

    @property
    def next_url(self) -> str | None:
        """Target of the `rel="next"` entry in a paginated API `Link` header."""
        match = LINK_NEXT.search(self.headers.get("link", ""))
        if match is None:
            return None
        return match.group("url")


def get_json(url: str, headers: dict[str, str] | None = None, timeout: int = 30) -> HttpResponse:
    merged = {"Accept": "application/json", "User-Agent": USER_AGENT}
    merged.update(headers or {})
    req = request.Request(url=url, headers=merged, method="GET")
    context = _build_ssl_context()
    logger.debug("GET %s", url)
    try:
        with request.urlopen(req, timeout=timeout, context=context) as response:
            body = response.read().decode("utf-8")
            payload = json.loads(body)
            normalized_headers = {k.lower(): v for k, v in response.headers.items()}
            return HttpResponse(
                status=response.status,
                headers=normalized_headers,
                data=payload,
            )
    except error.HTTPError as exc:
        detail = _error_detail(exc.read().decode("utf-8", errors="replace"))
        raise RuntimeError(f"HTTP {exc.code} for {url}: {detail[:400]}") from exc
    except error.URLError as exc:
        raise RuntimeError(f"Failed request to {url}: {exc.reason}") from exc


def _build_ssl_context() -> ssl.SSLContext:
    if _env_true("PR_ANNOTATOR_INSECURE_SKIP_VERIFY"):
        logger.warning("TLS certificate verification is disabled")
        return ssl._create_unverified_context()

    bundle = (
        os.getenv("PR_ANNOTATOR_CA_BUNDLE")
        or os.getenv("SSL_CERT_FILE")
        or os.getenv("REQUESTS_CA_BUNDLE")
    )
    if bundle:
        return ssl.create_default_context(cafile=bundle)

    return ssl.create_default_context(cafile=certifi.where())


def _env_true(name: str) -> bool:
    value = (os.getenv(name) or "").strip().lower()
    return value in {"1", "true", "yes", "on"}


def _error_detail(body: str) -> str:
    # GitHub error bodies look like {"message": "...", "documentation_url": "..."}.
    try:
        payload = json.loads(body)
    except ValueError:
        return body
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return body
