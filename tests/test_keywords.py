"""Tests for processors.keywords module."""

from nltk.stem.porter import PorterStemmer

from processors.keywords import KeywordExtractor, clean_text, extract_keywords

stem = PorterStemmer().stem


class TestCleanText:
    def test_removes_tags_and_urls(self) -> None:
        text = "<p>Ransomware <b>hits</b> hospital</p> https://example.com/story?id=1 today"
        assert clean_text(text) == "ransomware hits hospital today"

    def test_collapses_whitespace_and_lowercases(self) -> None:
        assert clean_text("  Data\n\tBREACH   Notice ") == "data breach notice"

    def test_none_returns_empty(self) -> None:
        assert clean_text(None) == ""

    def test_is_idempotent(self) -> None:
        once = clean_text("<div>Hackers LEAK   records</div> http://x.io")
        assert clean_text(once) == once


class TestKeywordExtractor:
    def test_empty_input_returns_empty(self) -> None:
        extractor = KeywordExtractor()
        assert extractor.extract("") == []
        assert extractor.extract(None) == []

    def test_ranks_by_frequency(self) -> None:
        result = extract_keywords("attack breach breach hacker attack breach")
        assert result == [(stem("breach"), 3), (stem("attack"), 2), (stem("hacker"), 1)]

    def test_ties_keep_encounter_order(self) -> None:
        result = extract_keywords("ransomware encryption hacker")
        assert [term for term, _ in result] == [stem("ransomware"), stem("encryption"), stem("hacker")]

    def test_never_exceeds_top_n(self) -> None:
        text = "ransomware encryption hacker breach attack exfiltration extortion malware"
        assert len(extract_keywords(text, top_n=3)) == 3
        assert len(extract_keywords(text)) == 5
        assert extract_keywords(text, top_n=0) == []

    def test_drops_stopwords_and_short_tokens(self) -> None:
        result = extract_keywords("The hackers said it would be OK, according to news reports of an attack")
        terms = [term for term, _ in result]
        for word in ("the", "said", "would", "according", "news", "it", "be", "ok", "to", "of", "an"):
            assert word not in terms
        assert stem("hackers") in terms
        assert stem("attack") in terms

    def test_drops_non_alphanumeric_tokens(self) -> None:
        assert extract_keywords("data_breach café") == []

    def test_ignores_markup_and_urls(self) -> None:
        result = extract_keywords('<a href="https://evil.example/ransomware">Ransomware</a> http://t.co/abc')
        assert result == [(stem("ransomware"), 1)]

    def test_same_result_on_cleaned_input(self) -> None:
        text = "<p>Ransomware gang LEAKS hospital records</p> https://example.com"
        assert extract_keywords(clean_text(text)) == extract_keywords(text)

    def test_custom_extra_stopwords(self) -> None:
        extractor = KeywordExtractor(extra_stopwords=["ransomware"])
        assert extractor.extract("ransomware hacker") == [(stem("hacker"), 1)]
