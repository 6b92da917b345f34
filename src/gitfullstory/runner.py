"""Entry points wiring settings, the GitHub client, and the report pipeline."""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional, TextIO

import requests

from .client import GitHubAPIError, GitHubClient, create_client
from .collectors import fetch_all_repositories, resolve_organizations
from .config import (
    EXIT_FETCH_FAILED,
    EXIT_INTERRUPTED,
    ConfigurationError,
    Settings,
    parse_args,
    resolve_settings,
)
from .reporter import report_open_pull_requests


def _log(message: str) -> None:
    print(message, file=sys.stderr)


def run(settings: Settings, client: Optional[GitHubClient] = None, out: Optional[TextIO] = None) -> int:
    """Walk orgs -> repositories -> open pull requests; return the number printed.

    Organization and repository listing errors propagate; pull-request
    errors are isolated per repository by the reporter.
    """
    client = client or create_client(settings.token)

    orgs = resolve_organizations(client, settings.orgs)
    _log(f"Searching for open PR's within github orgs: {orgs}")
    if settings.projects:
        _log(f"...for only projects: {sorted(settings.projects)}")
    if settings.users:
        _log(f"...by users: {sorted(settings.users)}")

    repos: List[Dict[str, Any]] = []
    printed = 0
    for org in orgs:
        org_repos = fetch_all_repositories(client, org, settings.projects)
        repos.extend(org_repos)
        for repo in org_repos:
            printed += report_open_pull_requests(
                client,
                org,
                repo.get("name"),
                settings.users,
                out=out,
                max_pages=settings.max_pages_prs,
            )

    _log(f"[done] {len(orgs)} orgs, {len(repos)} repositories, {printed} open pull requests")
    return printed


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point; exits non-zero on configuration or fatal fetch errors."""
    try:
        settings = resolve_settings(parse_args(argv))
        run(settings)
    except ConfigurationError as exc:
        _log(str(exc))
        sys.exit(exc.exit_code)
    except (GitHubAPIError, requests.RequestException) as exc:
        _log(f"[fatal] {exc}")
        sys.exit(EXIT_FETCH_FAILED)
    except KeyboardInterrupt:
        _log("[interrupted]")
        sys.exit(EXIT_INTERRUPTED)


__all__ = ["run", "main"]
