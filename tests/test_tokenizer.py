"""Tests for tokenizer.py — tokenization and per-field relevance."""

import pytest

from curalink_search.application.search.tokenizer import field_relevance, tokenize

# ============================================================
# tokenize
# ============================================================


class TestTokenize:
    def test_lowercases_and_splits_on_punctuation(self):
        assert tokenize("Phase-2 Glioblastoma, trials!") == ["phase", "2", "glioblastoma", "trials"]

    def test_preserves_duplicates_and_order(self):
        assert tokenize("trial Trial TRIAL") == ["trial", "trial", "trial"]

    @pytest.mark.parametrize("text", ["", "   ", "\t\n", None, "!!! ---"])
    def test_empty_input_yields_no_tokens(self, text):
        assert tokenize(text) == []

    def test_non_ascii_letters_are_separators(self):
        # Only [a-z0-9] survive
        assert tokenize("café naïve") == ["caf", "na", "ve"]

    def test_no_empty_tokens(self):
        assert all(tokenize("  a,,b;;  c  "))

    @pytest.mark.parametrize(
        "text",
        [
            "Immunotherapy for GBM (phase II)",
            "  Dr. A, M.D.  ",
            "CAR-T / checkpoint-inhibitors 2024",
        ],
    )
    def test_idempotent(self, text):
        tokens = tokenize(text)
        assert tokenize(" ".join(tokens)) == tokens


# ============================================================
# field_relevance
# ============================================================


class TestFieldRelevance:
    def test_all_keywords_found(self):
        assert field_relevance("Glioblastoma immunotherapy trials", ["glioblastoma", "trials"]) == 1.0

    def test_partial_match_fraction(self):
        assert field_relevance("Glioblastoma research", ["glioblastoma", "vaccine"]) == 0.5

    def test_substring_stem_matches(self):
        """Keyword 'cardi' matches token 'cardiology'."""
        assert field_relevance("Cardiology", ["cardi"]) == 1.0

    def test_keyword_must_fit_inside_one_token(self):
        assert field_relevance("heart failure", ["heartfailure"]) == 0.0

    def test_empty_field(self):
        assert field_relevance("", ["glioblastoma"]) == 0.0
        assert field_relevance(None, ["glioblastoma"]) == 0.0

    def test_empty_keywords(self):
        assert field_relevance("Glioblastoma", []) == 0.0

    def test_punctuation_only_field(self):
        assert field_relevance("---", ["a"]) == 0.0

    def test_repeated_keyword_counts_per_occurrence_in_query(self):
        # Two of three keyword entries hit
        assert field_relevance("oncology", ["onco", "onco", "cardio"]) == pytest.approx(2 / 3)

    @pytest.mark.parametrize(
        ("field", "keywords"),
        [
            ("a b c", ["a", "z"]),
            ("x", ["x", "x", "x"]),
            ("nothing here", ["zzz"]),
        ],
    )
    def test_bounded(self, field, keywords):
        assert 0.0 <= field_relevance(field, keywords) <= 1.0
