"""
Reddit listing client.

Fetches a subreddit's top posts from the public ``top.json`` endpoint and
classifies failures into the ``Redditx2mdError`` taxonomy.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import RedditConfig
from ..core.errors import (
    ForbiddenError,
    NetworkError,
    RateLimitError,
    Redditx2mdError,
    RequestTimeoutError,
)
from ..core.types import RawPost
from ..utils.logging import log_event


logger = logging.getLogger(__name__)

SOURCE = "reddit"


async def fetch_top_posts(
    subreddit: str,
    cfg: RedditConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[RawPost]:
    """Fetch top posts from a subreddit.

    Args:
        subreddit: Subreddit name (e.g. "ObsidianMD")
        cfg: Listing settings (time filter, limit, timeout, User-Agent)
        transport: Optional httpx transport, used by tests

    Returns:
        Posts in listing order. A response without the expected
        ``data.children`` structure yields an empty list.

    Raises:
        ForbiddenError: HTTP 403
        RateLimitError: HTTP 429
        RequestTimeoutError: The request timed out
        NetworkError: Any other HTTP or transport failure
    """
    url = f"{cfg.base_url.rstrip('/')}/r/{subreddit}/top.json"
    params = {"limit": cfg.limit, "t": cfg.time_filter}
    headers = {"User-Agent": cfg.user_agent}

    log_event(
        logger,
        "Fetch start",
        event="fetch_start",
        subreddit=subreddit,
        time_filter=cfg.time_filter,
        limit=cfg.limit,
    )

    try:
        async with httpx.AsyncClient(
            timeout=cfg.timeout_seconds,
            headers=headers,
            follow_redirects=True,
            trust_env=cfg.trust_env,
            transport=transport,
        ) as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise _classify_status(exc) from exc
    except httpx.TimeoutException as exc:
        raise _logged(
            RequestTimeoutError(
                "Request timeout - server did not respond in time",
                cause=exc,
                source=SOURCE,
            )
        ) from exc
    except httpx.HTTPError as exc:
        raise _logged(
            NetworkError(
                f"Network error - unable to reach Reddit API ({type(exc).__name__})",
                cause=exc,
                source=SOURCE,
            )
        ) from exc

    posts = parse_listing(_safe_json(resp))
    log_event(logger, "Fetch complete", event="fetch_complete", subreddit=subreddit, count=len(posts))
    return posts


def parse_listing(payload: Any) -> list[RawPost]:
    """Flatten a Reddit listing payload (``data.children[].data``) into posts."""
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if not isinstance(data, dict):
        return []
    children = data.get("children")
    if not isinstance(children, list):
        return []

    posts: list[RawPost] = []
    for child in children:
        if not isinstance(child, dict):
            continue
        post_data = child.get("data")
        if not isinstance(post_data, dict):
            continue
        posts.append(RawPost.from_listing(post_data))
    return posts


def _safe_json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


def _classify_status(exc: httpx.HTTPStatusError) -> Redditx2mdError:
    status_code = exc.response.status_code
    if status_code == 403:
        error: Redditx2mdError = ForbiddenError(
            "Forbidden: Access denied by Reddit API",
            cause=exc,
            status_code=status_code,
            source=SOURCE,
        )
    elif status_code == 429:
        error = RateLimitError(
            "API Rate Limit exceeded",
            cause=exc,
            status_code=status_code,
            source=SOURCE,
        )
    else:
        error = NetworkError(
            f"Network error - Reddit API returned HTTP {status_code}",
            cause=exc,
            status_code=status_code,
            source=SOURCE,
        )
    return _logged(error)


def _logged(error: Redditx2mdError) -> Redditx2mdError:
    log_event(
        logger,
        error.message,
        level=logging.ERROR,
        event="fetch_failed",
        error_kind=error.kind.value,
        status_code=error.status_code,
    )
    return error
