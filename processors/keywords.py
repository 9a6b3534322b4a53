import logging
import re
from collections import Counter
from typing import Iterable, List, Optional, Tuple

from nltk.stem.porter import PorterStemmer
from nltk.tokenize import RegexpTokenizer
from sumy.utils import get_stop_words

from config.settings import EXTRA_STOPWORDS, TOP_KEYWORDS

logger = logging.getLogger(__name__)

HTML_TAG_PATTERN = re.compile(r'<.*?>')
URL_PATTERN = re.compile(r'http\S+')
WHITESPACE_PATTERN = re.compile(r'\s+')
VALID_TOKEN_PATTERN = re.compile(r'[a-z0-9]+')


def clean_text(text: Optional[str]) -> str:
    """
    Strip markup and URLs, collapse whitespace and lowercase.

    Args:
        text: Raw text, possibly containing HTML from a feed summary.

    Returns:
        Cleaned text. Cleaning already-cleaned text is a no-op.
    """
    if not text:
        return ""

    text = HTML_TAG_PATTERN.sub('', text)
    text = URL_PATTERN.sub('', text)
    return WHITESPACE_PATTERN.sub(' ', text).strip().lower()


class KeywordExtractor:
    """Ranks the stems of an article's words by frequency."""

    def __init__(self, language: str = 'english', extra_stopwords: Optional[Iterable[str]] = None):
        """
        Initialize the keyword extractor.

        Args:
            language: Language of the stopword list and stemmer.
            extra_stopwords: Words dropped in addition to the standard stopwords.
                             If None, uses EXTRA_STOPWORDS from settings.
        """
        if extra_stopwords is None:
            extra_stopwords = EXTRA_STOPWORDS
        self.stop_words = frozenset(get_stop_words(language)) | frozenset(extra_stopwords)
        self.tokenizer = RegexpTokenizer(r'\w+')
        self.stemmer = PorterStemmer()

    def extract(self, text: Optional[str], top_n: int = TOP_KEYWORDS) -> List[Tuple[str, int]]:
        """
        Extract the most frequent stemmed terms from text.

        Args:
            text: Text to analyse (title and summary of an article).
            top_n: Maximum number of terms to return.

        Returns:
            List of (term, frequency) pairs, most frequent first. Terms with equal
            frequency keep the order in which they first appeared.
        """
        if not text or top_n <= 0:
            return []

        tokens = self.tokenizer.tokenize(clean_text(text))
        stems = [self.stemmer.stem(token) for token in tokens if self._is_candidate(token)]

        # Counter keeps insertion order and most_common() is a stable sort
        return Counter(stems).most_common(top_n)

    def _is_candidate(self, token: str) -> bool:
        return (
            token not in self.stop_words
            and len(token) > 2
            and VALID_TOKEN_PATTERN.fullmatch(token) is not None
        )


_default_extractor: Optional[KeywordExtractor] = None


def extract_keywords(text: Optional[str], top_n: int = TOP_KEYWORDS) -> List[Tuple[str, int]]:
    """Extract keywords with a shared, lazily built KeywordExtractor."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = KeywordExtractor()
    return _default_extractor.extract(text, top_n)
