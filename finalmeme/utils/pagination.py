# finalmeme/utils/pagination.py
"""
Page arithmetic for offset-paginated listings.

Pages are one-based: page p with limit L skips (p - 1) * L documents.
"""

import math
from typing import Optional, Tuple
from urllib.parse import urlencode


def skip_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(count: int, limit: int) -> int:
    return math.ceil(count / limit) if limit else 0


def page_url(base_url: str, page: int, flair: Optional[str] = None) -> str:
    params = {"flair": flair, "page": page} if flair else {"page": page}
    return f"{base_url}?{urlencode(params)}"


def page_links(base_url: str, page: int, count: int, limit: int,
               flair: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
    """
    Returns (previous, next) absolute URLs for a listing page.

    `next` exists only while page < total pages, `previous` only past the first page.
    The flair filter is carried into both links when present.
    """
    previous_url = page_url(base_url, page - 1, flair) if page > 1 else None
    next_url = page_url(base_url, page + 1, flair) if page < total_pages(count, limit) else None
    return previous_url, next_url
