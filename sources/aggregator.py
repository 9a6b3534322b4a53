import logging
import time
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from config.settings import BREACH_FEEDS, FEED_DELAY_SECONDS, RECENT_ARTICLES_DAYS
from models.article import AggregateResult, Article, DateRange
from sources.rss_fetcher import RSSFetcher
from utils.helpers import TitleMatcher, deduplicate_articles, is_substring_match

logger = logging.getLogger(__name__)


class NewsAggregator:
    """Collects breach news across all configured search feeds."""

    def __init__(
        self,
        feeds: Optional[Dict[str, str]] = None,
        fetcher: Optional[RSSFetcher] = None,
        delay_seconds: float = FEED_DELAY_SECONDS,
        matcher: TitleMatcher = is_substring_match,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the aggregator.

        Args:
            feeds: Mapping of search term to feed URL, fetched in iteration order.
                   If None, uses BREACH_FEEDS from settings.
            fetcher: Fetcher used for each feed.
            delay_seconds: Pause between consecutive feeds.
            matcher: Title matcher used for deduplication.
            sleep: Function used to pause between feeds.
        """
        self.feeds = feeds if feeds is not None else BREACH_FEEDS
        self.fetcher = fetcher or RSSFetcher()
        self.delay_seconds = delay_seconds
        self.matcher = matcher
        self.sleep = sleep

    def collect(self, now: datetime) -> List[Article]:
        """
        Fetch every feed, then deduplicate and sort newest first.

        Args:
            now: Reference time for the recency window.

        Returns:
            List of unique Article objects sorted by publish time, newest first.
        """
        logger.info("Fetching articles from Google News...")
        all_articles: List[Article] = []

        for index, (search_term, url) in enumerate(self.feeds.items()):
            if index > 0 and self.delay_seconds > 0:
                # Avoid hitting rate limits
                self.sleep(self.delay_seconds)
            all_articles.extend(self.fetcher.fetch_feed(search_term, url, now))

        unique_articles = deduplicate_articles(all_articles, self.matcher)
        sorted_articles = sorted(unique_articles, key=lambda a: a.published_at, reverse=True)

        logger.info(f"Found {len(sorted_articles)} unique articles from the past week")
        return sorted_articles

    def build_result(self, now: datetime) -> AggregateResult:
        """Collect articles and wrap them with report metadata."""
        articles = self.collect(now)

        return AggregateResult(
            generated_at=now,
            article_count=len(articles),
            source_count=len({article.source for article in articles}),
            date_range=DateRange(
                start=(now - timedelta(days=RECENT_ARTICLES_DAYS)).date(),
                end=now.date(),
            ),
            articles=articles,
        )
