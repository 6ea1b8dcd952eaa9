# Services package

from .variable_substitution import extract_variables, resolve, resolve_rows
from .url_composer import build_url_with_params, parse_params_from_url
from .auth_header import build_auth_header
from .request_assembler import assemble_request, request_body_looks_like_json
from .response_normalizer import (
    format_bytes,
    normalize_response,
    render_body,
    response_body_looks_like_json,
)
from .blob_store import BlobStore, SqlBlobStore
from .workspace_store import WorkspaceStore
from .http_executor import HttpxTransport, Transport, execute_request, get_environment_variables

__all__ = [
    "extract_variables",
    "resolve",
    "resolve_rows",
    "build_url_with_params",
    "parse_params_from_url",
    "build_auth_header",
    "assemble_request",
    "request_body_looks_like_json",
    "format_bytes",
    "normalize_response",
    "render_body",
    "response_body_looks_like_json",
    "BlobStore",
    "SqlBlobStore",
    "WorkspaceStore",
    "HttpxTransport",
    "Transport",
    "execute_request",
    "get_environment_variables",
]
