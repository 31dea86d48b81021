# connectors/roadworks/client.py
from __future__ import annotations
import httpx
from urllib.parse import urlparse
from typing import Optional, Dict, Any, List, Tuple
from common.settings import settings

TIMEOUT = 30  # seconds

# (field, (filename | None, content, content_type | None))
MultipartParts = List[Tuple[str, Tuple[Optional[str], bytes, Optional[str]]]]

def _is_absolute(url: str) -> bool:
    try:
        p = urlparse(url)
        return bool(p.scheme and p.netloc)
    except Exception:
        return False

def _resolve(url_or_path: str) -> str:
    if _is_absolute(url_or_path):
        return url_or_path
    return f"{settings.roads_api_base_url}{url_or_path}"

async def _request(method: str, url_or_path: str,
                   params: Optional[Dict[str, Any]] = None,
                   files: Optional[MultipartParts] = None,
                   extra_headers: Optional[Dict[str, str]] = None,
                   timeout: float = TIMEOUT,
                   transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.Response:
    """
    Single attempt, no retries: callers report failures to the user and the
    user decides whether to try again.
    """
    headers = {"Accept": "application/json"}
    if extra_headers:
        headers.update(extra_headers)

    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport) as cli:
        return await cli.request(method, _resolve(url_or_path), params=params,
                                 files=files, headers=headers)

async def roads_get_json(path: str,
                         params: Optional[Dict[str, Any]] = None,
                         timeout: float = TIMEOUT,
                         transport: Optional[httpx.AsyncBaseTransport] = None) -> Any:
    """
    GET wrapper. Non-2xx raises httpx.HTTPStatusError with the body for debugging.
    """
    r = await _request("GET", path, params=params, timeout=timeout, transport=transport)
    if r.status_code >= 400:
        raise httpx.HTTPStatusError(
            f"{r.status_code} {r.reason_phrase} - {r.text}",
            request=r.request,
            response=r,
        )
    return r.json()

async def roads_post_multipart(path: str,
                               parts: MultipartParts,
                               timeout: float = TIMEOUT,
                               transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.Response:
    """
    POST multipart/form-data. httpx writes the Content-Type header itself so
    the boundary is always right; the status is left to the caller.
    """
    return await _request("POST", path, files=parts, timeout=timeout, transport=transport)
