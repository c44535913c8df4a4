"""Helpers for handling paginated views."""

from __future__ import annotations

from math import ceil
from typing import Dict, List, Tuple, Union

from flask import request

PAGINATION_SIZES: Tuple[int, ...] = (6, 12, 25, 50)
ITEMS_PER_PAGE = PAGINATION_SIZES[0]


def get_per_page(param: str = "per_page", default: int = ITEMS_PER_PAGE) -> int:
    """Return a validated per-page value from the query string.

    Parameters
    ----------
    param:
        Query string parameter containing the requested page size.
    default:
        Fallback value used when the parameter is missing or invalid.

    Returns
    -------
    int
        A value from :data:`PAGINATION_SIZES`.
    """

    value = request.args.get(param, type=int)
    if value in PAGINATION_SIZES:
        return value
    if default in PAGINATION_SIZES:
        return default
    return PAGINATION_SIZES[0]


def get_page(param: str = "page") -> int:
    """Return the requested 1-based page number, never below 1."""

    value = request.args.get(param, 1, type=int)
    return value if value and value > 0 else 1


def total_pages(count: int, per_page: int) -> int:
    return max(1, ceil(count / per_page)) if per_page else 1


def build_pagination_args(
    per_page: int,
    *,
    page_param: str = "page",
    per_page_param: str = "per_page",
) -> Dict[str, Union[str, List[str]]]:
    """Assemble the query arguments pagination links should carry over.

    Every current query parameter is kept except the page number, and the
    validated ``per_page`` value replaces whatever was requested.
    """

    args: Dict[str, Union[str, List[str]]] = {}
    for key, values in request.args.lists():
        if key in {page_param, per_page_param} or not values:
            continue
        args[key] = values[0] if len(values) == 1 else values
    args[per_page_param] = str(per_page)
    return args
