"""
Byte fetching for model artifacts.

Remote artifacts are fetched with `requests`; local paths and
file:// URLs are read from disk. No retries are performed here.
"""

from pathlib import Path
from typing import Any, Optional
from urllib.parse import unquote, urlparse

import requests

from graphloader.models.options import RequestOptions

HTTP_SCHEMES = ("http://", "https://")
FILE_SCHEME = "file://"


def is_http_url(url: str) -> bool:
    """Check whether a URL is fetched over HTTP(S)."""
    return url.lower().startswith(HTTP_SCHEMES)


def coerce_request_options(request_options: Any) -> RequestOptions:
    """Accept RequestOptions, a plain dict, or None."""
    if request_options is None:
        return RequestOptions()
    if isinstance(request_options, RequestOptions):
        return request_options
    return RequestOptions.model_validate(request_options)


def to_local_path(url: str) -> Path:
    """Turn a file:// URL or plain path into a Path."""
    if url.lower().startswith(FILE_SCHEME):
        return Path(unquote(urlparse(url).path))
    return Path(url)


def weight_url(model_url: str, weight_path: str) -> str:
    """
    Resolve a shard path relative to the file that listed it.

    The query string of the listing URL is carried over to the shard,
    so signed or format-selecting parameters reach every request.

    Example:
        >>> weight_url("https://host/m/model.json?tfjs-format=file", "group1-shard1of1.bin")
        'https://host/m/group1-shard1of1.bin?tfjs-format=file'
    """
    base, sep, query = model_url.partition("?")
    prefix = base[:base.rfind("/") + 1]
    return f"{prefix}{weight_path}{sep}{query}"


def http_get(
    url: str,
    request_options: Optional[RequestOptions] = None,
    session: Optional[requests.Session] = None,
) -> bytes:
    """
    GET a URL and return the body.

    Raises:
        requests.HTTPError: On a non-2xx response.
    """
    options = coerce_request_options(request_options)
    getter = session.get if session is not None else requests.get
    response = getter(
        url,
        headers=options.headers,
        auth=options.effective_auth,
        timeout=options.effective_timeout,
        allow_redirects=True,
    )
    response.raise_for_status()
    return response.content


def read_local(url: str) -> bytes:
    """
    Read a local artifact.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = to_local_path(url)
    if not path.is_file():
        raise FileNotFoundError(f"Model artifact not found: {path}")
    return path.read_bytes()


def fetch_bytes(url: str, request_options: Optional[RequestOptions] = None) -> bytes:
    """Fetch an artifact from whichever transport its URL names."""
    if is_http_url(url):
        return http_get(url, request_options)
    return read_local(url)
