"""Configuration constants and CLI parsing for gitfullstory."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import List, Optional

from src.secrets import token_from_secrets

from .filters import parse_selector, split_selector

VERSION = "0.0.1"
USER_AGENT = f"gitfullstory/{VERSION}"
BASE_URL = "https://api.github.com"
PER_PAGE = 100  # GitHub caps list endpoints at 100; the default is 30
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "4"))
BACKOFF_BASE_SEC = 2
MAX_WAIT_ON_403 = int(os.getenv("MAX_WAIT_ON_403", "180"))
MAX_PAGES_PRS = int(os.getenv("MAX_PAGES_PRS", "0"))  # 0 = no cap

TOKEN_ENV_VARS = ("GITHUB_ACCESS_TOKEN", "GITHUB_TOKEN")
ORGS_ENV_VAR = "GITFULLSTORY_ORGS"
PROJECTS_ENV_VAR = "GITFULLSTORY_PROJECTS"
USERS_ENV_VAR = "GITFULLSTORY_USERS"

EXIT_MISSING_TOKEN = 86
EXIT_FETCH_FAILED = 1
EXIT_INTERRUPTED = 130


class ConfigurationError(ValueError):
    """Raised when required settings are missing before any request is made."""

    exit_code = EXIT_MISSING_TOKEN


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings for one invocation."""

    token: str
    orgs: List[str]
    projects: frozenset
    users: frozenset
    max_pages_prs: int = MAX_PAGES_PRS


def _env_token() -> str:
    for name in TOKEN_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return ""


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser; environment variables supply the defaults."""

    parser = argparse.ArgumentParser(
        prog="gitfullstory",
        description="command-line utility for seeing your team's open pull requests",
    )
    parser.add_argument(
        "--github_token",
        "-gt",
        default=_env_token(),
        help="your personal access token for github (env: GITHUB_ACCESS_TOKEN, GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--orgs",
        default=os.getenv(ORGS_ENV_VAR, ""),
        help="comma separated list of github organizations to filter pull requests on otherwise it fetches for all",
    )
    parser.add_argument(
        "--projects",
        default=os.getenv(PROJECTS_ENV_VAR, ""),
        help="comma separated list of github projects to filter pull requests on otherwise it fetches for all",
    )
    parser.add_argument(
        "--users",
        default=os.getenv(USERS_ENV_VAR, ""),
        help="comma separated list of github users to filter pull requests on otherwise it fetches for all",
    )
    parser.add_argument(
        "--max-pr-pages",
        type=int,
        default=int(os.getenv("MAX_PAGES_PRS", str(MAX_PAGES_PRS))),
        help="maximum pages of open pull requests to read per repository (0 = no cap)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def resolve_settings(args: Optional[argparse.Namespace] = None) -> Settings:
    """Return immutable settings, raising ConfigurationError without a token."""

    args = args or parse_args()
    token = (args.github_token or "").strip() or token_from_secrets()
    if not token:
        raise ConfigurationError("Error, missing github personal access token!")
    return Settings(
        token=token,
        orgs=split_selector(args.orgs),
        projects=frozenset(parse_selector(args.projects)),
        users=frozenset(parse_selector(args.users)),
        max_pages_prs=max(0, int(args.max_pr_pages)),
    )


__all__ = [
    "VERSION",
    "USER_AGENT",
    "BASE_URL",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "BACKOFF_BASE_SEC",
    "MAX_WAIT_ON_403",
    "MAX_PAGES_PRS",
    "TOKEN_ENV_VARS",
    "EXIT_MISSING_TOKEN",
    "EXIT_FETCH_FAILED",
    "EXIT_INTERRUPTED",
    "ConfigurationError",
    "Settings",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
