#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Small JSON-over-HTTP helpers shared by the holiday sources and the Slack notifier.
"""

import http.client
import json
import ssl
import urllib.request
import urllib.error
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlencode

import certifi

USER_AGENT = "holiday-notifier/1.0"
TIMEOUT_SECONDS = 30


def _ssl_context() -> ssl.SSLContext:
    return ssl.create_default_context(cafile=certifi.where())


def build_url(base_url: str, params: Optional[Dict[str, str]] = None) -> str:
    """
    Append URL-encoded query parameters to a base URL.

    Args:
        base_url: URL without a query string
        params: Optional query parameters

    Returns:
        Complete URL
    """
    if not params:
        return base_url
    return f"{base_url}?{urlencode(params)}"


def http_get_json(url: str, params: Optional[Dict[str, str]] = None) -> Any:
    """
    Perform HTTP GET request and return the decoded JSON response.

    Args:
        url: URL to fetch
        params: Optional query parameters

    Returns:
        Parsed JSON value

    Raises:
        RuntimeError: If the request fails, returns an error status or the body is not JSON
    """
    full_url = build_url(url, params)
    req = urllib.request.Request(full_url, headers={"User-Agent": USER_AGENT})

    try:
        with urllib.request.urlopen(req, timeout=TIMEOUT_SECONDS, context=_ssl_context()) as resp:
            return json.load(resp)
    except urllib.error.HTTPError as e:
        data = e.read().decode("utf-8", errors="ignore")
        # Query strings may carry an API key, so report the bare URL only.
        raise RuntimeError(f"HTTP {e.code} fetching {url}\n{data}") from e
    except urllib.error.URLError as e:
        raise RuntimeError(f"Network error fetching {url}: {e.reason}") from e
    except (OSError, http.client.HTTPException) as e:
        # Dropped connections and read timeouts are not always wrapped in URLError.
        raise RuntimeError(f"Network error fetching {url}: {e!r}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RuntimeError(f"Invalid JSON from {url}: {e}") from e


def http_post_json(url: str, payload: Dict[str, Any]) -> Tuple[int, str]:
    """
    POST a JSON body and return the response status and body.

    Error statuses are returned rather than raised so callers can report the body.

    Raises:
        RuntimeError: On network failure
    """
    req = urllib.request.Request(
        url,
        data=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
        method="POST",
    )

    try:
        with urllib.request.urlopen(req, timeout=TIMEOUT_SECONDS, context=_ssl_context()) as resp:
            return resp.status, resp.read().decode("utf-8", errors="ignore")
    except urllib.error.HTTPError as e:
        return e.code, e.read().decode("utf-8", errors="ignore")
    except urllib.error.URLError as e:
        raise RuntimeError(f"Network error posting to webhook: {e.reason}") from e
    except (OSError, http.client.HTTPException) as e:
        raise RuntimeError(f"Network error posting to webhook: {e!r}") from e
