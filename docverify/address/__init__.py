"""Address Matching.

Scores how well a free-text transcript corroborates a user-declared address.

Example:
    >>> from docverify.address import match_address
    >>> result = match_address(transcript, "14 Adeola Odeku Street, Victoria Island")
    >>> print(result.score, result.details.matched_words)
"""

from .matcher import (
    context_window,
    has_consecutive_tokens,
    match_address,
    normalize_text,
    token_weight,
    tokenize_address,
)
from .types import AddressMatchDetails, AddressMatchResult

__all__ = [
    "match_address",
    "normalize_text",
    "tokenize_address",
    "token_weight",
    "context_window",
    "has_consecutive_tokens",
    "AddressMatchResult",
    "AddressMatchDetails",
]
