"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class PgnMove:
    """A single mainline move extracted from PGN movetext."""

    san: str
    comment: str = ""


@dataclass(slots=True)
class ParsedPgn:
    """Structured PGN payload used by the game import path."""

    headers: dict[str, str]
    moves: list[PgnMove]
    result_token: str


def _today() -> str:
    return datetime.now().strftime("%Y.%m.%d")


@dataclass(frozen=True, slots=True)
class PgnTags:
    """Export tags of the Seven Tag Roster, minus the derived ``Result``."""

    event: str = "Casual Game"
    site: str = "?"
    date: str = field(default_factory=_today)
    round: str = "-"
    white: str = "Player"
    black: str = "Player"

    def roster(self, result_token: str) -> dict[str, str]:
        """Headers in canonical Seven Tag Roster order."""
        return {
            "Event": self.event,
            "Site": self.site,
            "Date": self.date,
            "Round": self.round,
            "White": self.white,
            "Black": self.black,
            "Result": result_token,
        }
