"""Tests for keyword occurrence scoring."""

from docqa.rag.keyword_search import keyword_search, query_terms, score


class TestQueryTerms:
    def test_lowercases_and_filters_short_tokens(self):
        assert query_terms("What is an API key?") == ["what", "api", "key?"]

    def test_custom_min_length(self):
        assert query_terms("go to the zoo", min_length=2) == ["go", "to", "the", "zoo"]


class TestScore:
    def test_counts_every_occurrence(self):
        assert score("Cats and cats and CATS.", "cats") == 3

    def test_sums_across_terms(self):
        assert score("The cat sat on the mat.", "the cat") == 3

    def test_ignores_short_terms(self):
        assert score("a an is of", "a an is of") == 0

    def test_substring_matches_count(self):
        assert score("category catalog", "cat") == 2

    def test_regex_characters_are_literal(self):
        assert score("Use C++ (version 2) here", "c++ (version") == 2
        assert score("nothing here", "a.*b") == 0

    def test_never_negative(self):
        assert score("", "anything") == 0


class TestKeywordSearch:
    def test_excludes_zero_scores(self):
        chunks = ["apples and pears", "bananas only"]
        assert keyword_search(chunks, "apples") == ["apples and pears"]

    def test_orders_by_score_then_position(self):
        chunks = ["one apple", "apple apple apple", "another apple", "none"]
        assert keyword_search(chunks, "apple", top_k=3) == [
            "apple apple apple",
            "one apple",
            "another apple",
        ]

    def test_respects_top_k(self):
        chunks = [f"apple {i}" for i in range(10)]
        assert len(keyword_search(chunks, "apple", top_k=4)) == 4

    def test_empty_query(self):
        assert keyword_search(["apple"], "") == []
