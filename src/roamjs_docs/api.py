"""Roam graph query client with optional caching."""

import hashlib
import json
import os
from pathlib import Path
from typing import Any

import requests
from loguru import logger

from roamjs_docs.config import (
    API_CACHE_PREFIX,
    API_TOKEN_FILES,
    GITHUB_RAW_HOST,
    README_BRANCH,
    REQUEST_TIMEOUT_SECONDS,
    ROAM_API_URL,
)
from roamjs_docs.errors import QueryError, RateLimitedError, UpstreamProtocolError


def _read_api_token() -> str:
    token = os.environ.get("ROAM_API_TOKEN")
    if token:
        return token.strip()
    for token_path in API_TOKEN_FILES:
        try:
            return token_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            pass
    msg = f"Cannot find roam token: ROAM_API_TOKEN unset and none of {API_TOKEN_FILES!r} exist"
    raise RuntimeError(msg)


class RoamApi:
    """Encapsulated Roam backend query API with caching."""

    def __init__(self, *, from_cache: bool = False, url: str = ROAM_API_URL) -> None:
        self.from_cache = from_cache
        self.url = url
        self.sess = requests.Session()
        self.api_token = _read_api_token()
        self.api_cache_prefix: str | None = API_CACHE_PREFIX if from_cache else None

        logger.debug(
            "API ready: url {!r}, from_cache {!r}, api_cache_prefix {!r}",
            self.url,
            self.from_cache,
            self.api_cache_prefix,
        )

        if self.api_cache_prefix:
            Path(self.api_cache_prefix).parent.mkdir(parents=True, exist_ok=True)

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _post(self, url: str, body: str) -> requests.Response:
        return self.sess.post(
            url,
            body,
            headers=self._headers,
            allow_redirects=False,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )

    def query(self, query: str) -> list[list[Any]]:
        """Run a Datalog query, following the store's single 307 redirect."""
        cache_name: str | None = None
        if self.api_cache_prefix:
            cache_name = self.api_cache_prefix + hashlib.sha1(query.encode("utf-8")).hexdigest()
            if Path(cache_name).exists():
                logger.debug("Filled from cache: {!r}", cache_name)
                with open(cache_name, encoding="utf-8") as f:
                    return json.load(f)  # type: ignore[no-any-return]

        logger.debug("Making query: {!r}", query[:64])
        body = json.dumps({"query": query})

        r = self._post(self.url, body)
        if r.status_code == 429:
            raise RateLimitedError()
        location = r.headers.get("Location") or r.headers.get("location")
        if r.status_code != 307 or not location:
            msg = f"Expected an immediate redirect (307), got: {r.status_code}"
            raise UpstreamProtocolError(msg, status=r.status_code)

        redirected = self._post(location, body)
        status = redirected.status_code
        if status == 429:
            raise RateLimitedError()
        if not 200 <= status < 400:
            raise QueryError(redirected.reason or f"HTTP {status}", status=status)

        rv: list[list[Any]] = redirected.json()["result"]
        if cache_name:
            with open(cache_name, "w", encoding="utf-8") as f:
                json.dump(rv, f)
        return rv


def readme_url(repo_url: str) -> str:
    """Return the raw README.md URL of a GitHub repository URL."""
    raw = repo_url.replace("github.com", GITHUB_RAW_HOST, 1)
    return f"{raw}/{README_BRANCH}/README.md"


def fetch_github_readme(repo_url: str) -> str:
    """Fetch the raw README.md of a GitHub repository."""
    url = readme_url(repo_url)
    logger.debug("Fetching README: {!r}", url)
    r = requests.get(url, timeout=REQUEST_TIMEOUT_SECONDS)
    r.raise_for_status()
    return r.text or ""
