import calendar
import feedparser
import requests
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional
import logging

from config.settings import REQUEST_TIMEOUT_SECONDS, USER_AGENT, TOP_KEYWORDS
from models.article import Article
from processors.keywords import KeywordExtractor
from utils.helpers import split_title, is_recent, relative_age
from utils.logger import safe_exception_handler

logger = logging.getLogger(__name__)


class FeedError(Exception):
    """Raised when a feed cannot be downloaded or parsed."""


class RSSFetcher:
    """Fetches and normalizes the articles of a single RSS search feed."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        user_agent: str = USER_AGENT,
        keyword_extractor: Optional[KeywordExtractor] = None,
        top_keywords: int = TOP_KEYWORDS,
    ):
        """
        Initialize the RSS fetcher.

        Args:
            session: HTTP session used for downloads. If None, a new one is created.
            timeout: Request timeout in seconds.
            user_agent: User-Agent header sent with every request.
            keyword_extractor: Extractor for article keywords.
            top_keywords: Number of keywords kept per article.
        """
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {
            'User-Agent': user_agent,
            'Accept': 'application/rss+xml, application/xml;q=0.9, */*;q=0.8',
        }
        self.keyword_extractor = keyword_extractor or KeywordExtractor()
        self.top_keywords = top_keywords

    def fetch_feed(self, search_term: str, url: str, now: datetime) -> List[Article]:
        """
        Fetch the articles of one search feed published in the past week.

        A broken entry is logged and skipped; a broken feed is logged and
        contributes no articles.

        Args:
            search_term: Label of the configured search.
            url: Feed URL.
            now: Reference time for the recency window.

        Returns:
            List of Article objects in feed order.
        """
        try:
            logger.info(f"Fetching feed for: {search_term}")
            feed = self._download(url)
        except Exception as e:
            safe_exception_handler(logger, f"Error processing feed {search_term}", e)
            return []

        if not feed.entries:
            logger.warning(f"No entries found for {search_term}")
            return []

        logger.info(f"Found {len(feed.entries)} entries for {search_term}")

        articles = []
        for entry in feed.entries:
            try:
                article = self._parse_entry(entry, search_term, now)
            except Exception as e:
                safe_exception_handler(logger, f"Error processing entry from {search_term}", e)
                continue
            if article is not None:
                articles.append(article)

        return articles

    def _download(self, url: str) -> Any:
        response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()

        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            raise FeedError(f"Unparseable feed at {url}: {feed.get('bozo_exception')}")
        return feed

    def _parse_entry(self, entry: Mapping[str, Any], search_term: str, now: datetime) -> Optional[Article]:
        """
        Build an Article from a feed entry.

        Returns:
            The Article, or None if it was published before the recency window.

        Raises:
            ValueError: If the entry has no title.
        """
        raw_title = (entry.get('title') or '').strip()
        if not raw_title:
            raise ValueError("entry has no title")

        title, source = split_title(raw_title)
        published_at = self._resolve_published(entry, now)

        if not is_recent(published_at, now):
            return None

        summary = entry.get('summary') or entry.get('description') or ''
        keywords = self.keyword_extractor.extract(f"{title} {summary}", self.top_keywords)

        return Article(
            search_term=search_term,
            title=title,
            source=source,
            published_at=published_at,
            link=entry.get('link') or '',
            keywords=[term for term, _ in keywords],
            pub_date=published_at.strftime('%Y-%m-%d'),
            time_ago=relative_age(published_at, now),
        )

    @staticmethod
    def _resolve_published(entry: Mapping[str, Any], now: datetime) -> datetime:
        # feedparser normalizes dates to UTC struct_time; unparseable dates are left unset
        parsed = entry.get('published_parsed') or entry.get('updated_parsed')
        if parsed is None:
            return now

        published_at = datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
        # Clock skew upstream must not place an article in the future
        return min(published_at, now)
