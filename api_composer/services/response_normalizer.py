"""
Response normalization service.

Converts a raw transport response into a ResponseSnapshot, choosing a
display form for the body and computing byte sizes.
"""

import json

from ..schemas.execute import RawResponse, ResponseSnapshot

EMPTY_BODY_PLACEHOLDER = "Empty body"
UNKNOWN_CONTENT_TYPE = "unknown"


def response_body_looks_like_json(body: str) -> bool:
    """Cheap sniff of an incoming body: starts with a brace or bracket once trimmed."""
    stripped = body.strip()
    return stripped.startswith("{") or stripped.startswith("[")


def try_format_json(payload: str) -> str:
    """Re-serialize ``payload`` with 2-space indentation, or return it unchanged."""
    try:
        return json.dumps(json.loads(payload), indent=2, ensure_ascii=False)
    except (ValueError, RecursionError):
        return payload


def display_body(raw_body: str, content_type: str) -> str:
    """
    Derive the display body from the raw text and content type alone.

    JSON (by content type or by a leading brace/bracket) is pretty-printed
    on a best-effort basis; an empty non-JSON body shows a placeholder.
    """
    if "application/json" in content_type or response_body_looks_like_json(raw_body):
        return try_format_json(raw_body)
    return raw_body or EMPTY_BODY_PLACEHOLDER


def render_body(raw_body: str, content_type: str, view: str = "pretty") -> str:
    """Body for the pretty/raw toggle; neither view needs the response again."""
    if view == "raw":
        return raw_body
    return display_body(raw_body, content_type)


def format_bytes(size: int | None) -> str:
    """
    Human-readable byte size.

    Example:
        >>> format_bytes(2048)
        '2.0 KB'
    """
    if size is None:
        return "-"
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


def normalize_response(raw: RawResponse, elapsed_ms: int) -> ResponseSnapshot:
    """
    Build the snapshot for ``raw`` received after ``elapsed_ms`` milliseconds.

    Args:
        raw: The complete transport response
        elapsed_ms: Wall-clock time of the send

    Returns:
        The normalized snapshot; ``size`` counts UTF-8 bytes of the raw body
    """
    content_type = raw.header("content-type") or UNKNOWN_CONTENT_TYPE
    size = len(raw.body_text.encode("utf-8"))

    return ResponseSnapshot(
        ok=200 <= raw.status < 300,
        status=raw.status,
        status_text=raw.status_text,
        time_ms=elapsed_ms,
        size=size,
        size_label=format_bytes(size),
        headers=list(raw.headers),
        body=display_body(raw.body_text, content_type),
        raw_body=raw.body_text,
        content_type=content_type,
    )
