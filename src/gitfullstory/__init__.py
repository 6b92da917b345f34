"""gitfullstory: list a team's open GitHub pull requests across organizations."""

from .runner import main, run

__all__ = ["main", "run"]
