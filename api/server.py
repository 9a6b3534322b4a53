"""FastAPI application serving the weekly breach news report."""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from html import escape
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from config.settings import OUTPUT_DIR, REFRESH_INTERVAL_HOURS
from delivery.report import render_report, write_report
from models.article import AggregateResult
from sources.aggregator import NewsAggregator
from utils.cache import NewsCache
from utils.scheduler import RefreshScheduler

logger = logging.getLogger(__name__)


def create_app(
    cache: Optional[NewsCache] = None,
    output_dir: str = OUTPUT_DIR,
    refresh_interval_hours: float = REFRESH_INTERVAL_HOURS,
) -> FastAPI:
    """Build the application around a news cache.

    Args:
        cache: Cache the routes read from. Defaults to one backed by a
            NewsAggregator over the configured feeds.
        output_dir: Directory the /update route renders into; served under /static.
        refresh_interval_hours: Period of the background refresh. 0 disables it.
    """
    if cache is None:
        cache = NewsCache(loader=NewsAggregator().build_result)

    def refresh_and_publish() -> AggregateResult:
        result = cache.refresh()
        write_report(result, output_dir)
        return result

    def scheduled_refresh() -> None:
        result = cache.get()
        write_report(result, output_dir)

    scheduler = None
    if refresh_interval_hours > 0:
        scheduler = RefreshScheduler(scheduled_refresh, refresh_interval_hours)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if scheduler is not None:
            scheduler.start()
        yield
        if scheduler is not None:
            scheduler.stop()

    app = FastAPI(
        title="Weekly Breach Monitor",
        description="Weekly data breach news collected from Google News search feeds",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.cache = cache
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"], allow_headers=["*"])

    # Blocking handlers run on the threadpool while feeds are fetched
    @app.get("/api/breach-news")
    def breach_news():
        """Article data with report metadata."""
        try:
            return cache.get().to_payload()
        except Exception as e:
            logger.error(f"Error in /api/breach-news: {e}")
            return JSONResponse(status_code=500, content={"error": str(e)})

    @app.get("/report", response_class=HTMLResponse)
    def report():
        """Rendered HTML report."""
        try:
            result = cache.get()
            return HTMLResponse(render_report(result.articles, result.generated_at))
        except Exception as e:
            logger.error(f"Error in /report: {e}")
            return HTMLResponse(f"<h1>Error</h1><p>{escape(str(e))}</p>", status_code=500)

    @app.get("/update", response_class=PlainTextResponse)
    def update():
        """Refresh now and publish the report to the static directory."""
        try:
            result = refresh_and_publish()
            return PlainTextResponse(f"Report updated successfully with {result.article_count} articles")
        except Exception as e:
            logger.error(f"Error in /update: {e}")
            return PlainTextResponse(f"Error updating report: {e}", status_code=500)

    @app.get("/health")
    def health():
        age = cache.age_seconds()
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "cache": {
                "exists": cache.payload is not None,
                "age_seconds": age if age is not None else "N/A",
            },
        }

    os.makedirs(output_dir, exist_ok=True)
    app.mount("/static", StaticFiles(directory=output_dir, html=True), name="static")

    return app
