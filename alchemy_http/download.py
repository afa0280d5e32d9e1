"""
Fetch the raw bytes behind a URL.
"""

from typing import Optional

from .config import DEFAULT_TIMEOUT
from .executor import for_verb
from .http.adapter import HTTPAdapter
from .models import HttpRequest, HttpVerb
from .serialization import RawSerializer


def download(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    adapter: Optional[HTTPAdapter] = None,
) -> bytes:
    """
    GET ``url`` and return the response body as bytes, whatever its content type.

    Args:
        url: URL to download
        timeout: Bound on the download, in seconds
        adapter: Optional custom HTTP adapter

    Returns:
        Raw response body

    Raises:
        ValueError: If ``url`` is missing
        ExecutionFailure: If the download could not be completed
    """
    if not url:
        raise ValueError("missing url")

    executor = for_verb(HttpVerb.GET, adapter=adapter)
    result = executor.execute(HttpRequest(url=url), RawSerializer(content_type="*/*"), timeout)
    return result.unwrap().raw_body
