"""Shared HTTP helpers used by the catalog fetchers and the Hangar client.

Encapsulates common request/timeout handling and DEBUG traces so callers
only deal with a response object or a single ``TransportError``. Callers
translate ``TransportError`` into their own error type; nothing here retries.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when a request could not complete (timeout, DNS, refused...)."""

    def __init__(self, message: str, *, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


def _request(method: str, url: str, *, context: str, timeout: Optional[float], **kwargs: Any) -> requests.Response:
    """Issue a request with consistent error handling and DEBUG traces."""
    safe_target = safe_url(url)
    effective_timeout = timeout if timeout is not None else Constants.REQUEST_TIMEOUT
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action=method,
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.request(method, url, timeout=effective_timeout, **kwargs)
        except requests.Timeout as exc:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                effective_timeout,
            )
            raise TransportError(
                f"{context} request timed out after {effective_timeout} seconds",
                timed_out=True,
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise TransportError(f"{context} connection error: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action=method,
                    outcome="success" if res.ok else "http_error",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res


def safe_get(url: str, *, context: str, timeout: Optional[float] = None, **kwargs: Any) -> requests.Response:
    """Perform a GET request.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "mojang", "papermc").
        timeout: Seconds before giving up; defaults to Constants.REQUEST_TIMEOUT.
        **kwargs: Passed through to requests.request.

    Returns:
        requests.Response: The HTTP response object, whatever its status.

    Raises:
        TransportError: The request did not produce a response.
    """
    return _request("GET", url, context=context, timeout=timeout, **kwargs)


def safe_post(url: str, *, context: str, timeout: Optional[float] = None, **kwargs: Any) -> requests.Response:
    """Perform a POST request.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "hangar").
        timeout: Seconds before giving up; defaults to Constants.REQUEST_TIMEOUT.
        **kwargs: Passed through to requests.request (data, files, headers...).

    Returns:
        requests.Response: The HTTP response object, whatever its status.

    Raises:
        TransportError: The request did not produce a response.
    """
    return _request("POST", url, context=context, timeout=timeout, **kwargs)
