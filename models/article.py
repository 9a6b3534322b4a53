from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List


class Article(BaseModel):
    """
    Model representing a breach news article found in one of the search feeds.

    Instances are immutable once built; `pub_date` and `time_ago` are the display
    forms of `published_at` relative to the time the feed was fetched.
    """
    model_config = ConfigDict(frozen=True)

    search_term: str
    title: str
    source: str
    published_at: datetime
    link: str = ""
    keywords: List[str] = Field(default_factory=list)
    pub_date: str = ""
    time_ago: str = ""

    def __str__(self) -> str:
        return f"{self.title} ({self.source})"


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: date
    end: date


class AggregateResult(BaseModel):
    """The merged, deduplicated and sorted output of one refresh."""
    model_config = ConfigDict(frozen=True)

    generated_at: datetime
    article_count: int
    source_count: int
    date_range: DateRange
    articles: List[Article] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Shape the result as the JSON body served by the API."""
        return {
            "meta": {
                "generated_at": self.generated_at.isoformat(),
                "article_count": self.article_count,
                "sources": self.source_count,
                "date_range": {
                    "start": self.date_range.start.isoformat(),
                    "end": self.date_range.end.isoformat(),
                },
            },
            "articles": [article.model_dump(mode="json") for article in self.articles],
        }
