"""
Request assembler.

Combines the composer's method, URL, rows, authentication and body with
the active environment's variables into one ready-to-send descriptor.
The steps run in a fixed order; only an empty URL and a malformed final
URL can fail, and both fail before any network call.
"""

from typing import Iterable

from loguru import logger

from ..exceptions import EmptyUrlError
from ..schemas.request import ComposerState, HeaderRow, RequestDescriptor
from .auth_header import build_auth_header
from .url_composer import build_url_with_params
from .variable_substitution import VariableLike, extract_variables, lookup, resolve, resolve_rows

CONTENT_TYPE = "Content-Type"
JSON_CONTENT_TYPE = "application/json"


def request_body_looks_like_json(body: str) -> bool:
    """Cheap sniff of an outgoing body: starts with a brace or bracket once trimmed."""
    stripped = body.strip()
    return stripped.startswith("{") or stripped.startswith("[")


def _has_header(headers: dict[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


def build_header_map(rows: Iterable[HeaderRow]) -> dict[str, str]:
    """Enabled rows with a non-empty trimmed key; later rows overwrite earlier ones."""
    headers: dict[str, str] = {}
    for row in rows:
        if row.enabled and row.key.strip():
            headers[row.key.strip()] = row.value.strip()
    return headers


def _set_header(headers: dict[str, str], name: str, value: str) -> None:
    # Replaces every case-insensitive match so the new value is the only one sent
    lowered = name.lower()
    for key in [key for key in headers if key.lower() == lowered]:
        del headers[key]
    headers[name] = value


def _log_unresolved(composer: ComposerState, variables: list[VariableLike]) -> None:
    texts = [composer.url, composer.body]
    for row in [*composer.headers, *composer.params]:
        texts.extend((row.key, row.value))
    missing = sorted({
        name
        for text in texts
        for name in extract_variables(text)
        if lookup(name, variables) is None
    })
    if missing:
        logger.debug("Unresolved variables replaced with empty values: {}", ", ".join(missing))


def assemble_request(
    composer: ComposerState,
    variables: Iterable[VariableLike]
) -> RequestDescriptor:
    """
    Build the outgoing request descriptor for ``composer``.

    Args:
        composer: The live request form
        variables: The active environment's variables (may be empty)

    Returns:
        The resolved descriptor

    Raises:
        EmptyUrlError: if the trimmed URL is empty
        MalformedUrlError: if params apply and the resolved URL is not absolute
    """
    if not composer.url.strip():
        raise EmptyUrlError()

    variables = list(variables)
    _log_unresolved(composer, variables)

    header_rows = resolve_rows(composer.headers, variables)
    param_rows = resolve_rows(composer.params, variables)
    url = resolve(composer.url, variables)
    body = resolve(composer.body, variables)

    headers = build_header_map(header_rows)

    auth_header = build_auth_header(composer.auth, variables)
    if auth_header is not None:
        _set_header(headers, *auth_header)

    attached_body: str | None = None
    if composer.method != "GET" and body.strip():
        attached_body = body
        if not _has_header(headers, CONTENT_TYPE) and request_body_looks_like_json(body):
            headers[CONTENT_TYPE] = JSON_CONTENT_TYPE

    final_url = build_url_with_params(url, param_rows)

    return RequestDescriptor(
        method=composer.method,
        url=final_url,
        headers=headers,
        body=attached_body,
    )
