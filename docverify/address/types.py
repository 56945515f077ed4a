"""Type definitions for address matching."""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class AddressMatchDetails:
    """Evidence behind an address match score.

    Attributes:
        exact_match: Normalized address appears verbatim in the transcript
        partial_matches: Deduplicated context snippets around matched tokens
        matched_words: Number of address tokens found in the transcript
        total_words: Number of address tokens considered
    """

    exact_match: bool = False
    partial_matches: Tuple[str, ...] = field(default_factory=tuple)
    matched_words: int = 0
    total_words: int = 0


@dataclass(frozen=True)
class AddressMatchResult:
    """Confidence that a transcript corroborates a declared address.

    Attributes:
        score: Weighted match score in [0, 1], rounded to 2 decimals
        details: Supporting evidence
    """

    score: float
    details: AddressMatchDetails

    @classmethod
    def empty(cls) -> "AddressMatchResult":
        """Zero result for empty inputs."""
        return cls(score=0.0, details=AddressMatchDetails())

    @property
    def exact_match(self) -> bool:
        return self.details.exact_match

    @property
    def matched_word_count(self) -> int:
        return self.details.matched_words

    @property
    def total_word_count(self) -> int:
        return self.details.total_words

    @property
    def partial_match_contexts(self) -> Tuple[str, ...]:
        return self.details.partial_matches
