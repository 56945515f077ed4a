"""Unit tests for address matching."""

import pytest

from docverify.address import (
    AddressMatchDetails,
    AddressMatchResult,
    context_window,
    has_consecutive_tokens,
    match_address,
    normalize_text,
    token_weight,
    tokenize_address,
)
from docverify.config_loader import AddressMatchConfig


@pytest.fixture
def config():
    return AddressMatchConfig()


class TestNormalizeText:
    """Test text normalisation."""

    def test_punctuation_and_whitespace(self):
        assert normalize_text("  Plot 12, Adeola-Odeku St.\n\tV/Island ") == (
            "plot 12 adeola odeku st v island"
        )

    def test_underscores_removed(self):
        assert normalize_text("block_7") == "block 7"

    def test_empty(self):
        assert normalize_text("") == ""


class TestTokenizeAddress:
    """Test address tokenisation."""

    def test_drops_short_tokens_and_stop_words(self, config):
        tokens = tokenize_address("plot of land at 5 b the ikoyi road", config)
        assert tokens == ["plot", "land", "ikoyi", "road"]

    def test_order_preserved(self, config):
        assert tokenize_address("lagos ikeja 123", config) == ["lagos", "ikeja", "123"]


class TestTokenWeight:
    """Test token weighting."""

    def test_length_based(self, config):
        assert token_weight("main", config) == pytest.approx(4 / 3)

    def test_capped(self, config):
        assert token_weight("victoriaisland", config) == pytest.approx(2.0)

    def test_digit_boost(self, config):
        assert token_weight("123", config) == pytest.approx(1.5)
        assert token_weight("100001", config) == pytest.approx(3.0)


class TestContextHelpers:
    """Test context window and consecutive-word detection."""

    def test_context_window_bounds(self):
        text = "a" * 100 + "lagos" + "b" * 100
        snippet = context_window(text, "lagos", 10)
        assert snippet == "a" * 10 + "lagos" + "b" * 10

    def test_context_window_missing(self):
        assert context_window("ikeja", "lagos", 10) == ""

    def test_consecutive_tokens(self):
        assert has_consecutive_tokens("12 broad street", ["12", "broad", "lagos"], 2)

    def test_non_consecutive_tokens(self):
        assert not has_consecutive_tokens("12 lagos", ["12", "broad", "lagos"], 2)


class TestMatchAddress:
    """Test end-to-end scoring."""

    def test_full_match(self):
        """All tokens present with the address verbatim in the transcript."""
        result = match_address("123 Main Street Lagos Ikeja", "123 Main Street, Lagos")

        assert result.score == 1.0
        assert result.exact_match is True
        assert result.matched_word_count == 4
        assert result.total_word_count == 4
        assert len(result.partial_match_contexts) >= 1

    @pytest.mark.parametrize(
        "transcript,address",
        [("", "12 Broad Street"), ("12 Broad Street", ""), ("", "")],
    )
    def test_empty_inputs(self, transcript, address):
        result = match_address(transcript, address)

        assert result == AddressMatchResult.empty()
        assert result.score == 0.0
        assert result.details == AddressMatchDetails()

    def test_no_match(self):
        result = match_address("Federal Republic of Nigeria", "12 Broad Street")

        assert result.score == 0.0
        assert result.matched_word_count == 0
        assert result.total_word_count == 3
        assert result.partial_match_contexts == ()

    def test_all_stop_words(self):
        """An address with nothing but stop words has no evidence to score."""
        result = match_address("and the of", "and the of")

        assert result.total_word_count == 0
        assert result.score == 0.0

    def test_scattered_tokens_without_bonus(self):
        filler = " x" * 60
        transcript = f"adeola{filler} odeku"
        result = match_address(transcript, "Adeola Odeku Ikoyi Lekki")

        # 2 + 5/3 out of 2 + 3 * 5/3
        assert result.score == pytest.approx(0.52)
        assert result.matched_word_count == 2

    def test_adjacent_tokens_get_bonus(self):
        result = match_address("adeola odeku", "Adeola Odeku Ikoyi Lekki")

        assert result.score == pytest.approx(0.68)

    def test_digit_tokens_weigh_more(self):
        """Matching the house number counts for more than a short word."""
        with_number = match_address("no 1234", "1234 Awolowo Road")
        with_word = match_address("the road", "1234 Awolowo Road")

        assert with_number.score > with_word.score

    def test_contexts_deduplicated(self):
        result = match_address("12 Broad Street", "12 Broad Street")
        contexts = result.partial_match_contexts

        assert len(contexts) == len(set(contexts))

    def test_score_in_range(self):
        for transcript in ["lagos", "lagos lagos lagos", "12 broad street lagos nigeria"]:
            result = match_address(transcript, "12 Broad Street, Lagos")
            assert 0.0 <= result.score <= 1.0

    def test_monotone_under_superset(self):
        """Adding more text to a transcript never lowers the score."""
        address = "14 Adeola Odeku Street, Victoria Island"
        transcripts = [
            "odeku",
            "odeku street",
            "14 odeku street",
            "14 adeola odeku street",
            "14 adeola odeku street victoria island lagos",
        ]
        scores = [match_address(t, address).score for t in transcripts]

        assert scores == sorted(scores)

    def test_pure(self):
        """Identical inputs always give identical results."""
        first = match_address("Plot 5 Admiralty Way Lekki", "Plot 5, Admiralty Way")
        second = match_address("Plot 5 Admiralty Way Lekki", "Plot 5, Admiralty Way")

        assert first == second

    def test_custom_stop_words(self):
        config = AddressMatchConfig(stop_words=["street"])

        result = match_address("12 broad", "12 Broad Street", config)

        assert result.total_word_count == 2
        assert result.matched_word_count == 2
