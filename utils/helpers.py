from typing import Callable, List, Tuple
from datetime import datetime, timedelta

from models.article import Article
from config.settings import RECENT_ARTICLES_DAYS

TITLE_SEPARATOR = " - "
UNKNOWN_SOURCE = "Unknown"

# Decides whether two lowercased titles describe the same story
TitleMatcher = Callable[[str, str], bool]


def split_title(raw_title: str) -> Tuple[str, str]:
    """
    Split a Google News headline into its title and publisher.

    Google News appends the publisher after the last " - ", e.g.
    "Breach Hits Firm - Example News".

    Args:
        raw_title: Headline as it appears in the feed.

    Returns:
        (title, source) tuple. Source is "Unknown" when there is no separator.
    """
    if TITLE_SEPARATOR not in raw_title:
        return raw_title, UNKNOWN_SOURCE

    title, source = raw_title.rsplit(TITLE_SEPARATOR, 1)
    return title, source


def is_recent(published_at: datetime, now: datetime, days: int = RECENT_ARTICLES_DAYS) -> bool:
    """Check if a publish time falls inside the trailing window ending at `now`."""
    return published_at >= now - timedelta(days=days)


def relative_age(published_at: datetime, now: datetime) -> str:
    """
    Describe how long ago something was published.

    Args:
        published_at: Publish time.
        now: Reference time.

    Returns:
        "N days ago" once a full day has elapsed, otherwise "N hours ago".
    """
    hours = int((now - published_at).total_seconds() // 3600)
    days = hours // 24

    if days > 0:
        return f"{days} day{'s' if days != 1 else ''} ago"
    return f"{hours} hour{'s' if hours != 1 else ''} ago"


def is_substring_match(title: str, seen: str) -> bool:
    """Two titles match when either one contains the other."""
    return title in seen or seen in title


def similar_text(text1: str, text2: str, threshold: float = 0.8) -> bool:
    """
    Check if two texts are similar using Jaccard similarity on word sets.

    Args:
        text1: First text.
        text2: Second text.
        threshold: Similarity threshold (0.0 to 1.0).

    Returns:
        True if the texts are similar, False otherwise.
    """
    words1 = set(text1.split())
    words2 = set(text2.split())

    if not words1 or not words2:
        return False

    intersection = words1.intersection(words2)
    union = words1.union(words2)

    similarity = len(intersection) / len(union)
    return similarity >= threshold


def deduplicate_articles(articles: List[Article], matcher: TitleMatcher = is_substring_match) -> List[Article]:
    """
    Remove near-duplicate articles, keeping the first one seen.

    Args:
        articles: List of Article objects in processing order.
        matcher: Predicate comparing a candidate's lowercased title with an
                 accepted one. Defaults to the substring heuristic.

    Returns:
        Deduplicated list of Article objects, in their original order.
    """
    seen_titles: List[str] = []
    unique_articles = []

    for article in articles:
        title = article.title.lower()

        if not any(matcher(title, seen) for seen in seen_titles):
            seen_titles.append(title)
            unique_articles.append(article)

    return unique_articles
