"""
HTTP Helpers

Thin `requests` wrappers for the chat completion endpoint. Transport
failures map onto the LLM error types (which callers retry); status and
body failures map onto HTTPRequestError (which they do not).

Usage:
    from gitm.utils.http_client import http_json_post

    data = http_json_post(
        "https://api.openai.com/v1/chat/completions",
        json={"model": "gpt-4-0613", "messages": [...]},
        headers={"Authorization": f"Bearer {api_key}"},
        timeout=120,
    )
"""

from typing import Any, Optional

import requests

from gitm.configs.constants import get_timeout
from gitm.exceptions import HTTPRequestError, LLMConnectionError, LLMTimeoutError

DEFAULT_TIMEOUT = get_timeout("http_default", 10)


def http_post(
    url: str,
    json: dict[str, Any],
    headers: Optional[dict[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Response:
    """
    POST a JSON body and return the response.

    Raises:
        LLMConnectionError: The endpoint could not be reached or the transfer failed
        LLMTimeoutError: No response within `timeout` seconds
        HTTPRequestError: 4xx or 5xx status, or a malformed URL
    """
    try:
        response = requests.post(url, json=json, headers=headers, timeout=timeout)
    except (
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidURL,
    ) as e:
        # Bad base_url: retrying cannot help
        raise HTTPRequestError(f"Invalid URL {url}: {e}") from e
    except requests.exceptions.ConnectionError as e:
        raise LLMConnectionError(f"Could not connect to {url}") from e
    except requests.exceptions.Timeout as e:
        raise LLMTimeoutError(f"No response from {url} within {timeout}s") from e
    except requests.exceptions.RequestException as e:
        raise LLMConnectionError(f"Request to {url} failed: {e}") from e

    if not response.ok:
        raise HTTPRequestError(
            f"HTTP {response.status_code} from {url}",
            status_code=response.status_code,
            response_text=response.text or None,
        )
    return response


def http_json_post(
    url: str,
    json: dict[str, Any],
    headers: Optional[dict[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """
    POST a JSON body and decode the JSON reply.

    Raises:
        LLMConnectionError, LLMTimeoutError: Transport failure
        HTTPRequestError: Bad status, or a body that is not a JSON object
    """
    response = http_post(url, json=json, headers=headers, timeout=timeout)
    try:
        data = response.json()
    except ValueError as e:
        raise HTTPRequestError(f"Invalid JSON from {url}", status_code=response.status_code) from e
    if not isinstance(data, dict):
        raise HTTPRequestError(f"Expected a JSON object from {url}", status_code=response.status_code)
    return data
