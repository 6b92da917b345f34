"""Authenticated GitHub REST client with retry/backoff for the listing endpoints."""

from __future__ import annotations

import os
import sys
import time
from typing import Any, Dict, List, NamedTuple, Optional
from urllib.parse import quote

import requests

from .config import (
    BACKOFF_BASE_SEC,
    BASE_URL,
    MAX_RETRIES,
    MAX_WAIT_ON_403,
    PER_PAGE,
    REQUEST_TIMEOUT,
    USER_AGENT,
    ConfigurationError,
)


class GitHubAPIError(RuntimeError):
    """A GitHub request that failed permanently or ran out of retries."""

    def __init__(self, message: str, status: Optional[int] = None, url: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.url = url


class Page(NamedTuple):
    """One page of a listing endpoint."""

    items: List[Dict[str, Any]]
    has_next: bool


def sleep_with_jitter(base: float) -> None:
    """Pause execution with +/- 25% jitter to avoid synchronized retries."""
    jitter = base * 0.25 * (0.5 - (os.urandom(1)[0] / 255.0))
    time.sleep(max(0.0, base + jitter))


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        return str(body)[:300]
    return str(body.get("message") or body.get("error") or body.get("text") or "")


def log_http_error(resp: requests.Response, url: str) -> None:
    """Print a short, human-readable message when GitHub returns an error."""
    print(f"[error] HTTP {resp.status_code} for {url}\n  -> {_error_message(resp)}", file=sys.stderr)


def _is_rate_limited(resp: requests.Response) -> bool:
    if resp.status_code == 429:
        return True
    headers = resp.headers or {}
    return headers.get("X-RateLimit-Remaining") == "0" or bool(headers.get("Retry-After"))


def _rate_limit_wait(resp: requests.Response, attempt: int) -> float:
    headers = resp.headers or {}
    retry_after = headers.get("Retry-After")
    reset = headers.get("X-RateLimit-Reset")
    if retry_after and str(retry_after).isdigit():
        wait_sec = int(retry_after)
    elif reset and str(reset).isdigit():
        wait_sec = max(0, int(reset) - int(time.time())) + 1
    else:
        wait_sec = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
    return min(wait_sec, MAX_WAIT_ON_403)


def request_with_backoff(session: requests.Session, method: str, url: str, **kwargs) -> requests.Response:
    """Perform a REST call, retrying transport errors, 5xx, and rate limits.

    Returns the 2xx response. Anything else ends in GitHubAPIError: other 4xx
    statuses (including non-rate-limit 403s) immediately, transient failures
    once MAX_RETRIES attempts are used up.
    """
    timeout = kwargs.pop("timeout", REQUEST_TIMEOUT)
    last_exc: Optional[requests.RequestException] = None
    resp: Optional[requests.Response] = None

    for attempt in range(1, MAX_RETRIES + 1):
        try:
            resp = session.request(method, url, timeout=timeout, **kwargs)
        except requests.RequestException as exc:
            last_exc = exc
            resp = None
            if attempt < MAX_RETRIES:
                delay = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
                print(f"[retry {attempt}/{MAX_RETRIES}] {exc} -> sleep {delay:.1f}s", file=sys.stderr)
                sleep_with_jitter(delay)
            continue

        if 200 <= resp.status_code < 300:
            return resp

        if resp.status_code in (403, 429):
            if not _is_rate_limited(resp):
                log_http_error(resp, url)
                raise GitHubAPIError(
                    f"HTTP {resp.status_code} for {url}: {_error_message(resp)}", resp.status_code, url
                )
            if attempt < MAX_RETRIES:
                wait_sec = _rate_limit_wait(resp, attempt)
                print(f"[backoff {resp.status_code}] waiting {wait_sec}s for {url}", file=sys.stderr)
                sleep_with_jitter(wait_sec)
            continue

        if resp.status_code < 500:
            log_http_error(resp, url)
            raise GitHubAPIError(
                f"HTTP {resp.status_code} for {url}: {_error_message(resp)}", resp.status_code, url
            )

        if attempt < MAX_RETRIES:
            delay = BACKOFF_BASE_SEC * (2 ** (attempt - 1))
            print(f"[retry {attempt}/{MAX_RETRIES}] HTTP {resp.status_code} -> sleep {delay:.1f}s", file=sys.stderr)
            sleep_with_jitter(delay)

    if resp is not None:
        log_http_error(resp, url)
        raise GitHubAPIError(
            f"HTTP {resp.status_code} for {url} after {MAX_RETRIES} attempts", resp.status_code, url
        )
    raise GitHubAPIError(f"{method} {url} failed after {MAX_RETRIES} attempts: {last_exc}", url=url) from last_exc


class GitHubClient:
    """Thin wrapper around the GitHub REST API for the three listing calls."""

    def __init__(self, token: str, base_url: str = BASE_URL, timeout: float = REQUEST_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": USER_AGENT,
                "Authorization": f"Bearer {token}",
            }
        )

    def _url(self, path: str) -> str:
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{path}"

    def _get_page(self, path: str, params: Dict[str, Any]) -> Page:
        url = self._url(path)
        resp = request_with_backoff(self.session, "GET", url, params=params, timeout=self.timeout)
        batch = resp.json()
        if not isinstance(batch, list):
            raise GitHubAPIError(f"expected a list from {url}, got {type(batch).__name__}", resp.status_code, url)
        return Page(batch, "next" in (resp.links or {}))

    def list_organizations(self) -> List[Dict[str, Any]]:
        """Organizations visible to the token (single request, up to PER_PAGE)."""
        return self._get_page("/user/orgs", {"per_page": PER_PAGE}).items

    def list_repositories(self, org: str, page: int = 1, per_page: int = PER_PAGE) -> Page:
        return self._get_page(f"/orgs/{quote(org, safe='')}/repos", {"per_page": per_page, "page": page})

    def list_pull_requests(
        self,
        org: str,
        repo: str,
        page: int = 1,
        per_page: int = PER_PAGE,
        state: str = "open",
    ) -> Page:
        return self._get_page(
            f"/repos/{quote(org, safe='')}/{quote(repo, safe='')}/pulls",
            {"state": state, "per_page": per_page, "page": page},
        )


def create_client(token: Optional[str]) -> GitHubClient:
    """Build an authenticated client; an empty token is a configuration error."""
    token = (token or "").strip()
    if not token:
        raise ConfigurationError("Error, missing github personal access token!")
    return GitHubClient(token)


__all__ = [
    "GitHubAPIError",
    "Page",
    "sleep_with_jitter",
    "log_http_error",
    "request_with_backoff",
    "GitHubClient",
    "create_client",
]
