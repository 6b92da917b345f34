"""Printing of open pull requests filtered by author."""

from __future__ import annotations

import sys
from typing import Any, Collection, Dict, Optional, TextIO

import requests

from .client import GitHubAPIError, GitHubClient
from .collectors import fetch_open_pull_requests
from .config import MAX_PAGES_PRS
from .filters import is_selected


def author_login(pr: Dict[str, Any]) -> str:
    return (pr.get("user") or {}).get("login") or ""


def format_pull_request(pr: Dict[str, Any]) -> str:
    """Render one report line: `Open Pull Request #<number> by <login> - <title>`."""
    return f"Open Pull Request #{pr.get('number')} by {author_login(pr)} - {pr.get('title') or ''}"


def report_open_pull_requests(
    client: GitHubClient,
    org: str,
    repo: str,
    user_selector: Collection[str],
    out: Optional[TextIO] = None,
    max_pages: int = MAX_PAGES_PRS,
) -> int:
    """Print matching open pull requests for `org/repo` and return how many were printed.

    A failed listing is logged and reported as zero lines so sibling
    repositories still get processed.
    """
    out = out or sys.stdout
    try:
        pulls = fetch_open_pull_requests(client, org, repo, max_pages=max_pages)
    except (GitHubAPIError, requests.RequestException) as exc:
        print(f"[error] fetching pull requests for repository '{org}/{repo}' - {exc}", file=sys.stderr)
        return 0

    printed = 0
    for pr in pulls:
        if not is_selected(author_login(pr), user_selector):
            continue
        print(format_pull_request(pr), file=out)
        printed += 1
    return printed


__all__ = ["author_login", "format_pull_request", "report_open_pull_requests"]
