"""Organization, repository, and pull-request collection over paged listings."""

from __future__ import annotations

from typing import Any, Callable, Collection, Dict, Iterator, List, Sequence

from .client import GitHubClient, Page
from .config import MAX_PAGES_PRS
from .filters import is_selected


def iter_pages(fetch_page: Callable[[int], Page], max_pages: int = 0) -> Iterator[Dict[str, Any]]:
    """Yield records page by page until no next page is reported or max_pages hits."""
    page = 1
    while True:
        if max_pages and page > max_pages:
            break
        batch = fetch_page(page)
        yield from batch.items
        if not batch.has_next:
            break
        page += 1


def resolve_organizations(client: GitHubClient, explicit_selector: Sequence[str]) -> List[str]:
    """Return the explicit org logins, or every org the token can see."""
    if explicit_selector:
        return list(explicit_selector)
    return [org.get("login") for org in client.list_organizations() if org.get("login")]


def fetch_all_repositories(
    client: GitHubClient,
    org: str,
    project_selector: Collection[str],
) -> List[Dict[str, Any]]:
    """Return every repository of `org` whose name passes the project selector.

    Errors from any page propagate to the caller.
    """
    return [
        repo
        for repo in iter_pages(lambda page: client.list_repositories(org, page=page))
        if is_selected(repo.get("name"), project_selector)
    ]


def fetch_open_pull_requests(
    client: GitHubClient,
    org: str,
    repo: str,
    max_pages: int = MAX_PAGES_PRS,
) -> List[Dict[str, Any]]:
    """Return open pull requests for `org/repo`, optionally capped at max_pages."""
    return list(iter_pages(lambda page: client.list_pull_requests(org, repo, page=page), max_pages))


__all__ = [
    "iter_pages",
    "resolve_organizations",
    "fetch_all_repositories",
    "fetch_open_pull_requests",
]
