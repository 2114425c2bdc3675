"""
Live suggestions for the radar prompt bar.

Pure and synchronous, cheap enough to run on every keystroke.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from workflow_radar.core.constants import MAX_SUGGESTIONS, MIN_SUGGESTION_INPUT_CHARS


@dataclass(frozen=True)
class Suggestion:
    """A candidate topic with its category."""

    text: str
    category: str


@dataclass(frozen=True)
class SuggestionTile:
    """A starter topic shown before the user types."""

    id: str
    title: str
    category: str
    emoji: Optional[str] = None
    trending: bool = False


DEFAULT_SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion("AI sentiment about cryptocurrency", "finance"),
    Suggestion("Taylor Swift's latest album reviews", "entertainment"),
    Suggestion("Climate change policy debates", "politics"),
    Suggestion("Remote work productivity trends", "work"),
    Suggestion("Electric vehicle market sentiment", "tech"),
    Suggestion("Mental health awareness campaigns", "health"),
    Suggestion("Startup funding landscape", "business"),
    Suggestion("Social media platform migrations", "tech"),
    Suggestion("Sustainable fashion movements", "lifestyle"),
    Suggestion("Web3 gaming adoption", "tech"),
)

DEFAULT_TILES: tuple[SuggestionTile, ...] = (
    SuggestionTile("1", "AI and Technology", "technology", emoji="🤖"),
    SuggestionTile("2", "Climate Change", "environment", emoji="🌍"),
    SuggestionTile("3", "Politics and Elections", "politics", emoji="🗳️"),
    SuggestionTile("4", "Stock Market", "finance", emoji="📈"),
    SuggestionTile("5", "Health and Wellness", "health", emoji="💪"),
    SuggestionTile("6", "Entertainment News", "entertainment", emoji="🎬"),
)


class SuggestionRanker:
    """Filters a fixed candidate list against partial input."""

    def __init__(
        self,
        candidates: Sequence[Suggestion] = DEFAULT_SUGGESTIONS,
        min_chars: int = MIN_SUGGESTION_INPUT_CHARS,
        limit: int = MAX_SUGGESTIONS,
    ) -> None:
        self.candidates = tuple(candidates)
        self.min_chars = min_chars
        self.limit = limit

    def rank(self, text: Optional[str]) -> list[Suggestion]:
        """
        Candidates whose text or category contains ``text``, ignoring case.

        Keeps candidate-list order and returns at most ``limit`` items; input
        shorter than ``min_chars`` yields nothing.
        """
        if not text or len(text) < self.min_chars:
            return []

        needle = text.lower()
        matches = [
            candidate
            for candidate in self.candidates
            if needle in candidate.text.lower() or needle in candidate.category.lower()
        ]
        return matches[: self.limit]

    @staticmethod
    def tiles() -> list[SuggestionTile]:
        return list(DEFAULT_TILES)
