"""Tests for query_merger.py — profile condition merging."""

import pytest

from curalink_search.application.search.query_merger import merge_query_with_context


class TestMergeQueryWithContext:
    def test_appends_condition(self):
        assert merge_query_with_context("immunotherapy", "Glioblastoma") == "immunotherapy Glioblastoma"

    def test_no_condition_returns_trimmed_query(self):
        assert merge_query_with_context("  immunotherapy  ", None) == "immunotherapy"
        assert merge_query_with_context("immunotherapy", "   ") == "immunotherapy"

    def test_empty_query_returns_condition(self):
        assert merge_query_with_context("", "Glioblastoma") == "Glioblastoma"
        assert merge_query_with_context(None, " Glioblastoma ") == "Glioblastoma"

    def test_condition_already_present_case_insensitive(self):
        assert merge_query_with_context("new GLIOBLASTOMA trials", "Glioblastoma") == "new GLIOBLASTOMA trials"

    def test_condition_as_substring_of_a_word_counts_as_present(self):
        assert merge_query_with_context("lymphomas", "lymphoma") == "lymphomas"

    def test_both_empty(self):
        assert merge_query_with_context("", "") == ""

    @pytest.mark.parametrize(
        ("query", "condition"),
        [
            ("immunotherapy", "Glioblastoma"),
            ("", "Glioblastoma"),
            ("glioblastoma vaccine", "Glioblastoma"),
            ("  spaced   query ", "Breast Cancer"),
            ("anything", None),
        ],
    )
    def test_idempotent(self, query, condition):
        once = merge_query_with_context(query, condition)
        assert merge_query_with_context(once, condition) == once
