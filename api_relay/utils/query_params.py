"""
Query parameter filtering for forwarded requests
"""

from collections import Counter
from typing import Dict, Iterable, List, Tuple, Union

from fastapi.datastructures import QueryParams

QueryInput = Union[QueryParams, Iterable[Tuple[str, str]]]


def _is_structured_key(key: str) -> bool:
    """Bracketed keys (a[], a[b]) parse as arrays or objects, not strings"""
    return "[" in key and key.endswith("]")


def string_query_params(query_params: QueryInput, exclude: Iterable[str] = ()) -> Dict[str, str]:
    """
    Collect the inbound query parameters that hold a single plain string.

    A key repeated in the query string, or written with brackets, would
    reach a browser-style parser as an array or object; those keys are
    dropped rather than forwarded. Keys listed in ``exclude`` are dropped
    too. Order of first appearance is preserved.

    Args:
        query_params: Starlette query params or (key, value) pairs
        exclude: Keys never to forward

    Returns:
        Ordered mapping of key to value
    """
    if isinstance(query_params, QueryParams):
        items: List[Tuple[str, str]] = query_params.multi_items()
    else:
        items = list(query_params)

    counts = Counter(key for key, _ in items)
    excluded = set(exclude)

    forwarded: Dict[str, str] = {}
    for key, value in items:
        if key in excluded or counts[key] > 1 or _is_structured_key(key):
            continue
        if not isinstance(value, str):
            continue
        forwarded[key] = value
    return forwarded
