import json
import logging
import os
from datetime import datetime, timedelta, timezone
from html import escape
from typing import List, Optional

from config.settings import RECENT_ARTICLES_DAYS
from models.article import AggregateResult, Article

logger = logging.getLogger(__name__)

REPORT_FILE = "index.html"
DATA_FILE = "breach-news.json"

NO_ARTICLES_HTML = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Weekly Data Breach News - No Articles Found</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 800px; margin: 0 auto; padding: 20px; }
        h1 { color: #4285F4; }
        .message { background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin: 20px 0; }
    </style>
</head>
<body>
    <h1>Weekly Data Breach News</h1>
    <div class="message">
        <h2>No data breach articles found from the past week</h2>
        <p>Try running the report again later, or check your internet connection.</p>
    </div>
</body>
</html>
"""

REPORT_STYLE = """
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 1200px; margin: 0 auto; padding: 20px; }
        h1 { color: #4285F4; padding-bottom: 10px; border-bottom: 1px solid #eee; }
        .container { overflow-x: auto; }
        table { border-collapse: collapse; width: 100%; margin: 20px 0; }
        th { background-color: #4285F4; color: white; padding: 10px; text-align: left; border: 1px solid #ddd; }
        td { padding: 10px; border: 1px solid #ddd; vertical-align: top; }
        tr:nth-child(even) { background-color: #f9f9f9; }
        tr:hover { background-color: #f1f1f1; }
        a { color: #4285F4; text-decoration: none; }
        a:hover { text-decoration: underline; }
        .keywords { font-style: italic; color: #666; }
        .source { font-weight: bold; color: #d32f2f; }
        .search-term { color: #388e3c; }
        .date { white-space: nowrap; }
        .time-ago { font-size: 0.85em; color: #666; display: block; }
        .footer { margin-top: 30px; padding-top: 15px; border-top: 1px solid #eee; font-size: 0.9em; color: #666; text-align: center; }
"""


def format_date_range(end: datetime, days: int = RECENT_ARTICLES_DAYS) -> str:
    """Format the report window, e.g. "Jan 1 - Jan 8, 2024"."""
    start = end - timedelta(days=days)
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"


def render_report(articles: List[Article], generated_at: Optional[datetime] = None) -> str:
    """
    Render the weekly report as an HTML document.

    Every value taken from a feed is HTML-escaped before it is placed in the markup.

    Args:
        articles: Articles to list, in display order.
        generated_at: End of the report window. Defaults to the current time.

    Returns:
        HTML document. A fixed "no articles" page when `articles` is empty.
    """
    if not articles:
        return NO_ARTICLES_HTML

    generated_at = generated_at or datetime.now(timezone.utc)
    date_range = format_date_range(generated_at)

    rows = "".join(_render_row(article) for article in articles)

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Weekly Data Breach News - {date_range}</title>
    <style>{REPORT_STYLE}    </style>
</head>
<body>
    <h1>Weekly Data Breach News</h1>
    <p>Data breach and cybersecurity news from {date_range}</p>
    <p>Found {len(articles)} unique articles from the past week.</p>

    <div class="container">
        <table>
            <thead>
                <tr>
                    <th>Date</th>
                    <th>Source</th>
                    <th>Title</th>
                    <th>Keywords</th>
                    <th>Search Term</th>
                </tr>
            </thead>
            <tbody>{rows}
            </tbody>
        </table>
    </div>

    <div class="footer">
        <p>This weekly report was generated on {generated_at:%Y-%m-%d %H:%M:%S}</p>
    </div>
</body>
</html>
"""


def _render_row(article: Article) -> str:
    return f"""
                <tr>
                    <td class="date">
                        {escape(article.pub_date)}
                        <span class="time-ago">{escape(article.time_ago)}</span>
                    </td>
                    <td class="source">{escape(article.source)}</td>
                    <td><a href="{escape(article.link)}" target="_blank">{escape(article.title)}</a></td>
                    <td class="keywords">{escape(", ".join(article.keywords))}</td>
                    <td class="search-term">{escape(article.search_term)}</td>
                </tr>"""


def write_report(result: AggregateResult, output_dir: str) -> str:
    """
    Write the rendered report and its JSON data to a directory for static serving.

    Args:
        result: Aggregate result to publish.
        output_dir: Target directory, created if missing.

    Returns:
        Path of the written HTML report.
    """
    os.makedirs(output_dir, exist_ok=True)

    report_path = os.path.join(output_dir, REPORT_FILE)
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(render_report(result.articles, result.generated_at))

    with open(os.path.join(output_dir, DATA_FILE), "w", encoding="utf-8") as f:
        json.dump(result.to_payload(), f, indent=2)

    logger.info(f"Wrote report with {result.article_count} articles to {report_path}")
    return report_path
