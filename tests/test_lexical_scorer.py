"""Tests for the lexical scorer."""

import pytest

from rerank_metrics.packages.lexical_scorer import lexical_score, query_terms


class TestQueryTerms:
    def test_drops_short_terms_and_lowercases(self):
        assert query_terms("Flutter UI in 2 Steps") == ["flutter", "steps"]

    def test_ignores_surrounding_whitespace(self):
        assert query_terms("  widget\tlifecycle \n") == ["widget", "lifecycle"]


class TestLexicalScore:
    def test_counts_every_term_occurrence(self):
        assert lexical_score("Flutter Widget Lifecycle widget", "widget lifecycle") == 3

    @pytest.mark.parametrize("query", ["a an of", "", "   ", "UI to 2"])
    def test_short_terms_only_score_zero(self, query):
        assert lexical_score("a an of UI to 2 anything", query) == 0

    def test_case_insensitive_for_text(self):
        text = "Stateful counter with setState"
        query = "setstate counter"
        assert lexical_score(text, query) == lexical_score(text.upper(), query)
        assert lexical_score(text, query) == 2

    def test_metacharacters_are_literal(self):
        assert lexical_score("I like c++ and c++17", "c++") == 2
        assert lexical_score("cccc", "c++") == 0

    def test_parentheses_and_brackets_are_literal(self):
        assert lexical_score("call foo() then [a-z] ok", "foo() [a-z]") == 2
        assert lexical_score("foo then x", "foo() [a-z]") == 0

    def test_occurrences_do_not_overlap(self):
        assert lexical_score("aaaaaa", "aaa") == 2

    def test_empty_text(self):
        assert lexical_score("", "widget") == 0
