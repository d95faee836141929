"""Tests for text-scan citation extraction."""

from llm_router.ai.citations import citations_from_urls, extract_citations


class TestExtractCitations:
    def test_strips_trailing_punctuation(self):
        citations = extract_citations("See http://a.com/x, and https://b.com/y.")
        assert [(c.title, c.url) for c in citations] == [
            ("Source 1", "http://a.com/x"),
            ("Source 2", "https://b.com/y"),
        ]

    def test_duplicates_are_kept_in_order(self):
        citations = extract_citations("https://dup.io then again https://dup.io")
        assert [c.title for c in citations] == ["Source 1", "Source 2"]
        assert [c.url for c in citations] == ["https://dup.io", "https://dup.io"]

    def test_strips_closing_parenthesis_runs(self):
        citations = extract_citations("(see https://example.org/page).")
        assert citations[0].url == "https://example.org/page"

    def test_inner_punctuation_is_kept(self):
        citations = extract_citations("https://example.org/a.b,c?q=1 end")
        assert citations[0].url == "https://example.org/a.b,c?q=1"

    def test_no_urls(self):
        assert extract_citations("nothing to cite here") == []

    def test_empty_text(self):
        assert extract_citations("") == []

    def test_ignores_other_schemes(self):
        assert extract_citations("ftp://files.example.com and mailto:a@b.c") == []

    def test_snippet_is_absent(self):
        citation = extract_citations("http://a.com")[0]
        assert citation.snippet is None


class TestCitationsFromUrls:
    def test_titles_are_one_based(self):
        citations = citations_from_urls(["http://x.com", "http://y.com"])
        assert [(c.title, c.url) for c in citations] == [
            ("Source 1", "http://x.com"),
            ("Source 2", "http://y.com"),
        ]

    def test_urls_kept_verbatim(self):
        citations = citations_from_urls(["http://x.com/path)."])
        assert citations[0].url == "http://x.com/path)."
