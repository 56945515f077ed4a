"""
Address Matcher - scores how well a transcript corroborates a declared address.

The score is a weighted share of address tokens found in the transcript.
Longer tokens and tokens containing digits (house numbers, postcodes) carry
more weight than generic place-name words. A bonus is applied when one context
snippet holds several adjacent address tokens, rewarding phrase-level
corroboration over scattered single-word hits.

Every function here is pure: identical inputs always give identical output.
"""

import logging
import re
from typing import List, Optional, Sequence

from docverify.config_loader import AddressMatchConfig, get_default_config

from .types import AddressMatchDetails, AddressMatchResult

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Lowercase, replace punctuation with spaces, collapse whitespace, trim.

    Example:
        >>> normalize_text("  Plot 12, Adeola-Odeku St. ")
        'plot 12 adeola odeku st'
    """
    lowered = text.lower()
    without_punctuation = _NON_WORD.sub(" ", lowered)
    return _WHITESPACE.sub(" ", without_punctuation).strip()


def tokenize_address(normalized_address: str, config: AddressMatchConfig) -> List[str]:
    """Split a normalized address into evidence tokens (order preserved)."""
    stop_words = set(config.stop_words)
    return [
        token
        for token in normalized_address.split(" ")
        if len(token) >= config.min_token_length and token not in stop_words
    ]


def token_weight(token: str, config: AddressMatchConfig) -> float:
    """
    Weight of a token: min(max_weight, len / divisor), boosted if it has a digit.

    Example:
        >>> token_weight("123", AddressMatchConfig())
        1.5
    """
    weight = min(config.max_token_weight, len(token) / config.length_divisor)
    if any(ch.isdigit() for ch in token):
        weight *= config.digit_multiplier
    return weight


def context_window(text: str, keyword: str, window: int) -> str:
    """Return the text surrounding the first occurrence of keyword ("" if absent)."""
    index = text.find(keyword)
    if index == -1:
        return ""
    start = max(0, index - window)
    end = min(len(text), index + len(keyword) + window)
    return text[start:end]


def has_consecutive_tokens(snippet: str, tokens: Sequence[str], min_words: int) -> bool:
    """True if snippet contains at least min_words tokens in an unbroken run."""
    consecutive = 0
    for token in tokens:
        if token in snippet:
            consecutive += 1
            if consecutive >= min_words:
                return True
        else:
            consecutive = 0
    return False


def match_address(
    transcript_text: str,
    declared_address: str,
    config: Optional[AddressMatchConfig] = None,
) -> AddressMatchResult:
    """
    Score how well a transcript corroborates a declared address.

    Args:
        transcript_text: Text extracted from the document
        declared_address: Address the user declared
        config: Matching parameters (uses defaults if None)

    Returns:
        AddressMatchResult with score in [0, 1] and supporting details

    Example:
        >>> result = match_address("123 Main Street Lagos Ikeja", "123 Main Street, Lagos")
        >>> result.score, result.details.matched_words, result.details.exact_match
        (1.0, 4, True)
    """
    if not transcript_text or not declared_address:
        return AddressMatchResult.empty()

    config = config if config is not None else get_default_config().address

    normalized_text = normalize_text(transcript_text)
    normalized_address = normalize_text(declared_address)

    exact_match = bool(normalized_address) and normalized_address in normalized_text

    tokens = tokenize_address(normalized_address, config)

    found: List[str] = []
    contexts: List[str] = []
    for token in tokens:
        if token not in normalized_text:
            continue
        found.append(token)
        snippet = context_window(normalized_text, token, config.context_window)
        if snippet and snippet not in contexts:
            contexts.append(snippet)

    matched_weight = 0.0
    total_weight = 0.0
    found_set = set(found)
    for token in tokens:
        weight = token_weight(token, config)
        total_weight += weight
        if token in found_set:
            matched_weight += weight

    score = matched_weight / total_weight if total_weight > 0 else 0.0

    if any(
        has_consecutive_tokens(snippet, tokens, config.consecutive_min_words)
        for snippet in contexts
    ):
        score = min(1.0, score * config.consecutive_bonus)

    score = round(min(1.0, max(0.0, score)), 2)

    logger.debug(
        f"Address match: score={score:.2f}, matched={len(found)}/{len(tokens)}, "
        f"exact={exact_match}"
    )

    return AddressMatchResult(
        score=score,
        details=AddressMatchDetails(
            exact_match=exact_match,
            partial_matches=tuple(contexts),
            matched_words=len(found),
            total_words=len(tokens),
        ),
    )
