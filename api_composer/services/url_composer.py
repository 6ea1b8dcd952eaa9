"""
URL/query composition service.

Merges a base URL with the editable parameter list and derives a
parameter list back from an existing URL.
"""

from typing import Iterable

import httpx

from ..exceptions import MalformedUrlError
from ..schemas.request import ParamRow


def parse_absolute_url(url: str) -> httpx.URL:
    """
    Parse ``url`` as an absolute URL (scheme and host required).

    Raises:
        MalformedUrlError: if the URL cannot be parsed or is relative
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise MalformedUrlError(url) from exc

    if not parsed.is_absolute_url:
        raise MalformedUrlError(url)
    return parsed


def build_url_with_params(url: str, params: Iterable[ParamRow]) -> str:
    """
    Apply enabled params to ``url`` with set semantics.

    Rows that are disabled or whose trimmed key is empty are skipped. When
    no row remains the URL is returned untouched, including any query string
    it already carries. Otherwise each trimmed key is set to its trimmed
    value in list order: an existing key keeps its position and all of its
    duplicates collapse into the single new value.

    Example:
        >>> build_url_with_params("https://x.io/a?q=0", [ParamRow(key="q", value="1")])
        'https://x.io/a?q=1'

    Raises:
        MalformedUrlError: if params apply and ``url`` is not an absolute URL
    """
    enabled = [param for param in params if param.enabled and param.key.strip()]
    if not enabled:
        return url

    parsed = parse_absolute_url(url)
    query = parsed.params
    for param in enabled:
        query = query.set(param.key.strip(), param.value.strip())
    return str(parsed.copy_with(params=query))


def parse_params_from_url(url: str) -> list[ParamRow]:
    """
    Derive one enabled ParamRow per query pair of ``url``, in order.

    Returns an empty list for an unparseable URL.
    """
    try:
        parsed = parse_absolute_url(url)
    except MalformedUrlError:
        return []

    return [
        ParamRow(key=key, value=value, enabled=True)
        for key, value in parsed.params.multi_items()
    ]
