"""Docker Hub tag catalog client.

Walks the paginated ``/v2/repositories/<namespace>/<repo>/tags/`` listing,
following ``next`` links until the last page. Pagination is modelled as an
explicit state machine (``Fetching`` -> ``Done`` | ``Failed``) driven by
``fetch_catalog``.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import requests

from common.http_client import robust_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from config import MatrixConfig
from .models import Done, Err, FetchResult, Failed, Fetching, Ok, PageState

logger = logging.getLogger(__name__)


def _page_names(data: Any) -> List[str]:
    """Extract tag names from one page body, tolerating malformed entries."""
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        return []
    names = []
    for entry in results:
        name = entry.get("name") if isinstance(entry, dict) else None
        if isinstance(name, str):
            names.append(name)
    return names


def step(state: Fetching, session: requests.Session, config: MatrixConfig) -> PageState:
    """Fetch the page named by ``state`` and return the next state.

    Args:
        state: Current ``Fetching`` state.
        session: HTTP session shared across pages.
        config: Run configuration (timeout and retry tunables).

    Returns:
        ``Fetching`` for the following page, ``Done`` after the last page, or
        ``Failed`` when the request or body is unusable.
    """
    status, _, text = robust_get(
        state.url,
        session=session,
        timeout=config.timeout,
        retries=config.retries,
        retry_delay=config.retry_delay,
    )
    if status == 0:
        return Failed(reason=text)
    if not 200 <= status < 300:
        return Failed(reason=f"Failed to fetch tags from {safe_url(state.url)}: HTTP {status}")

    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        return Failed(reason=f"Invalid JSON from {safe_url(state.url)}: {e}")

    tags = state.tags + _page_names(data)
    pages = state.pages + 1
    next_url = data.get("next") if isinstance(data, dict) else None

    if is_debug_enabled(logger):
        logger.debug(
            "Catalog page parsed",
            extra=extra_context(
                event="parse",
                component="dockerhub",
                action="page",
                page=pages,
                total=len(tags),
                target=safe_url(state.url),
            ),
        )

    if isinstance(next_url, str) and next_url:
        return Fetching(url=next_url, tags=tags, pages=pages)
    return Done(tags=tags, pages=pages)


def fetch_catalog(config: Optional[MatrixConfig] = None) -> FetchResult:
    """Retrieve every tag name from the catalog, in catalog order.

    Never raises; any failure aborts the walk and yields ``Err`` with no
    partial tag list.
    """
    cfg = config or MatrixConfig(require_destination=False)
    state: PageState = Fetching(url=cfg.catalog_start_url())

    logger.info("Fetching all tags from %s...", safe_url(cfg.catalog_url))
    with requests.Session() as session:
        while isinstance(state, Fetching):
            state = step(state, session, cfg)

    if isinstance(state, Failed):
        logger.error("Error fetching tags: %s", state.reason)
        return Err(reason=state.reason)

    logger.info("Successfully fetched %d total tags across %d pages.", len(state.tags), state.pages)
    return Ok(tags=state.tags)


def fetch_all_tags(config: Optional[MatrixConfig] = None) -> List[str]:
    """Best-effort variant of ``fetch_catalog``: empty list on any failure."""
    result = fetch_catalog(config)
    if isinstance(result, Err):
        return []
    return result.tags
