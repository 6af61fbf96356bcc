"""
Topic search across YouTube and the open web.
"""
import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import List, Optional
from urllib.parse import urlparse

from duckduckgo_search import DDGS

from core.config import (
    DEFAULT_NUM_ARTICLES,
    DEFAULT_NUM_YOUTUBE,
    SEARCH_TIMEOUT_SEC,
    ResourceSourceConfig,
)
from models.resource_models import LearningResource, VideoCandidate
from services.ingestion.youtube_fetcher import youtube_fetcher
from services.ranking.resource_ranker import rank_resources

logger = logging.getLogger(__name__)


def classify_source(url: str) -> Optional[str]:
    """Return "blog" or "article" for a web result, or None if it should be skipped."""
    config = ResourceSourceConfig()
    parsed = urlparse(url)
    domain = parsed.netloc.lower()
    if domain.startswith("www."):
        domain = domain[4:]

    if not domain:
        return None
    if any(domain == d or domain.endswith("." + d) for d in config.BLACKLISTED_DOMAINS):
        return None
    if any(parsed.path.lower().endswith(ext) for ext in config.REJECTED_EXTENSIONS):
        return None
    if any(domain == d or domain.endswith("." + d) for d in config.BLOG_DOMAINS):
        return "blog"
    return "article"


def search_articles(topic: str, limit: int = DEFAULT_NUM_ARTICLES) -> List[LearningResource]:
    """Search the web for written tutorials on a topic."""
    config = ResourceSourceConfig()
    results = []

    with DDGS() as ddgs:
        for result in ddgs.text(f"{topic} tutorial guide", max_results=limit * 3):
            url = result.get('href', '')
            source = classify_source(url)
            if not source:
                continue

            results.append(LearningResource(
                id=str(uuid.uuid4()),
                title=result.get('title', '') or url,
                source=source,
                url=url,
                thumbnail=config.PLACEHOLDER_THUMBNAIL,
                author=urlparse(url).netloc,
                description=result.get('body', ''),
            ))

            if len(results) >= limit:
                break

    return results


def video_to_resource(video: VideoCandidate) -> LearningResource:
    return LearningResource(
        id=str(uuid.uuid4()),
        title=video.title,
        source="youtube",
        url=video.url,
        thumbnail=video.thumbnail,
        channel=video.channel,
        duration=video.duration,
        views=video.views,
        likes=video.likes,
        published_at=video.published_at,
        description=video.description,
    )


def search_resources(
    topic: str,
    num_youtube: int = DEFAULT_NUM_YOUTUBE,
    num_articles: int = DEFAULT_NUM_ARTICLES,
    searcher=youtube_fetcher,
) -> List[LearningResource]:
    """
    Search videos and articles for a topic and rank them together.

    A failing or slow backend contributes no results; the other still does.
    """
    videos = []
    articles = []

    with ThreadPoolExecutor(max_workers=2) as executor:
        future_videos = executor.submit(searcher.search_videos, topic, num_youtube)
        future_articles = executor.submit(search_articles, topic, num_articles)
        deadline = time.monotonic() + SEARCH_TIMEOUT_SEC

        try:
            videos = future_videos.result(timeout=max(0.0, deadline - time.monotonic()))
        except FutureTimeoutError:
            logger.warning("YouTube search timed out")
        except Exception as e:
            logger.warning(f"YouTube search error: {e}")

        try:
            articles = future_articles.result(timeout=max(0.0, deadline - time.monotonic()))
        except FutureTimeoutError:
            logger.warning("Article search timed out")
        except Exception as e:
            logger.warning(f"Article search error: {e}")

    resources = [video_to_resource(video) for video in videos] + articles
    logger.info(f"Found {len(resources)} resources for topic: {topic}")
    return rank_resources(resources)
