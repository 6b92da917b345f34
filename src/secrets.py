"""Utilities for loading the local (gitignored) GitHub credential."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SECRETS_FILENAME = "local_secrets.json"


def _default_secrets_path() -> Path:
    root = Path(__file__).resolve().parents[1]
    return root / DEFAULT_SECRETS_FILENAME


def load_local_secrets(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load secrets from a JSON file; return {} when the file is absent or unreadable."""

    candidate = path or os.getenv("GITFULLSTORY_SECRETS_FILE") or _default_secrets_path()
    secrets_path = Path(candidate).expanduser()
    if not secrets_path.exists():
        return {}
    try:
        with secrets_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"[warn] ignoring unreadable secrets file {secrets_path}: {exc}", file=sys.stderr)
        return {}
    return data if isinstance(data, dict) else {}


def token_from_secrets(path: Optional[str | Path] = None) -> str:
    """Return the stored personal access token, or "" when none is configured."""
    token = load_local_secrets(path).get("github_token") or ""
    return token.strip() if isinstance(token, str) else ""


__all__ = ["load_local_secrets", "token_from_secrets", "DEFAULT_SECRETS_FILENAME"]
