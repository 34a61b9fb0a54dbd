"""Shared HTTP helpers used by the tag catalog client.

Encapsulates request timeout, bounded retry and DEBUG tracing so callers only
deal with a ``(status_code, headers, text)`` tuple and never with requests
exceptions.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json", "User-Agent": Constants.USER_AGENT}


def _backoff_delay(base_delay: float, attempt: int) -> float:
    """Exponential backoff: base, 2*base, 4*base, ..."""
    return base_delay * (2 ** attempt)


def robust_get(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = Constants.REQUEST_TIMEOUT,
    retries: int = Constants.HTTP_RETRY_MAX,
    retry_delay: float = Constants.HTTP_RETRY_BASE_DELAY_SEC,
    **kwargs: Any,
) -> Tuple[int, Dict[str, str], str]:
    """Perform a GET request with timeout and bounded retries.

    Transport errors and 5xx responses are retried up to ``retries`` attempts
    in total, sleeping with exponential backoff in between. Any other status
    is returned as-is on the first attempt.

    Args:
        url: Target URL.
        session: Optional session to reuse the connection across pages.
        headers: Extra request headers merged over DEFAULT_HEADERS.
        timeout: Per-request timeout in seconds.
        retries: Total number of attempts (minimum 1).
        retry_delay: Base delay in seconds for the backoff.
        **kwargs: Passed through to ``get``.

    Returns:
        Tuple of (status_code, headers_dict, text). status_code is 0 when no
        response was received; text then carries the failure description.
    """
    getter = session.get if session is not None else requests.get
    merged_headers = dict(DEFAULT_HEADERS)
    if headers:
        merged_headers.update(headers)
    safe_target = safe_url(url)
    attempts = max(1, int(retries))
    last_failure = ""

    for attempt in range(attempts):
        if attempt:
            delay = _backoff_delay(retry_delay, attempt - 1)
            logger.warning(
                "Retrying %s (attempt %d/%d) in %.2fs: %s",
                safe_target, attempt + 1, attempts, delay, last_failure,
            )
            time.sleep(delay)

        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action="GET",
                        target=safe_target,
                        attempt=attempt + 1,
                    ),
                )
            try:
                response = getter(url, headers=merged_headers, timeout=timeout, **kwargs)
            except requests.Timeout:
                last_failure = f"timed out after {timeout} seconds"
                continue
            except requests.RequestException as exc:  # includes ConnectionError
                last_failure = f"connection error: {exc}"
                continue

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                ),
            )

        if response.status_code >= 500:
            last_failure = f"server error {response.status_code}"
            if attempt + 1 < attempts:
                continue
        return response.status_code, dict(response.headers), response.text

    return 0, {}, f"Request failed after {attempts} attempts: {last_failure}"
