"""
Composer helper API routes.

Side-effect free endpoints backing the request form: defaults, URL/param
synchronisation, request preview and the pretty/raw body toggle.
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_store
from ..schemas.execute import (
    BuildUrlRequest,
    BuildUrlResponse,
    ExecuteRequest,
    ParseParamsRequest,
    RenderBodyRequest,
    RenderBodyResponse,
)
from ..schemas.request import ComposerState, HeaderRow, ParamRow, RequestDescriptor
from ..services.http_executor import get_environment_variables
from ..services.request_assembler import assemble_request
from ..services.response_normalizer import render_body
from ..services.url_composer import build_url_with_params, parse_params_from_url
from ..services.workspace_store import WorkspaceStore


router = APIRouter(prefix="/api/composer", tags=["composer"])

DEFAULT_URL = "https://jsonplaceholder.typicode.com/posts/1"
DEFAULT_BODY = '{\n  "title": "Hello from Postman Clone"\n}'


def default_composer() -> ComposerState:
    """The form a new session starts with."""
    return ComposerState(
        method="GET",
        url=DEFAULT_URL,
        headers=[HeaderRow(key="Accept", value="application/json")],
        params=parse_params_from_url(DEFAULT_URL),
        body=DEFAULT_BODY,
    )


@router.get("/defaults", response_model=ComposerState)
def get_defaults():
    """Get a fresh default composer state with new row IDs."""
    return default_composer()


@router.post("/parse-params", response_model=list[ParamRow])
def parse_params(data: ParseParamsRequest):
    """
    Derive the param list from a URL's query string.

    Used to sync the param rows from the URL; the result replaces the
    current rows wholesale. An unparseable URL yields an empty list.
    """
    return parse_params_from_url(data.url)


@router.post("/build-url", response_model=BuildUrlResponse)
def build_url(data: BuildUrlRequest):
    """
    Apply the enabled params to a URL.

    Raises:
        MalformedUrlError: 400 if params apply and the URL is not absolute
    """
    return BuildUrlResponse(url=build_url_with_params(data.url, data.params))


@router.post("/preview", response_model=RequestDescriptor)
def preview_request(request: ExecuteRequest, store: WorkspaceStore = Depends(get_store)):
    """
    Assemble the request exactly as it would be sent, without sending it.

    Raises:
        EmptyUrlError: 400 if the URL is empty
        MalformedUrlError: 400 if the final URL cannot be composed
        ResourceNotFoundError: 404 if ``environment_id`` is unknown
    """
    variables = get_environment_variables(store, request.environment_id)
    composer = ComposerState.model_validate(request.model_dump(exclude={"environment_id"}))
    return assemble_request(composer, variables)


@router.post("/render-body", response_model=RenderBodyResponse)
def render_response_body(data: RenderBodyRequest):
    """Re-derive the pretty or raw display body from a stored snapshot's raw body."""
    return RenderBodyResponse(body=render_body(data.raw_body, data.content_type, data.view))
