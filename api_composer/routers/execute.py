"""
Request execution API routes.

Provides endpoints for executing the live composer state and saved
requests. Local validation failures answer 400 before anything is sent;
transport failures answer 502/504 and are still recorded in history.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..dependencies import get_store, get_transport
from ..exceptions import ErrorResponse, ResourceNotFoundError
from ..schemas.execute import ExecuteOptions, ExecuteRequest, ExecuteResult
from ..schemas.request import ComposerState
from ..services.http_executor import Transport, execute_request
from ..services.workspace_store import WorkspaceStore


router = APIRouter(prefix="/api/execute", tags=["execute"])

_RESPONSES = {
    200: {"model": ExecuteResult, "description": "Successful execution"},
    400: {"model": ErrorResponse, "description": "Empty or malformed URL"},
    502: {"model": ExecuteResult, "description": "Network error"},
    504: {"model": ExecuteResult, "description": "Request timeout"},
}


def _to_response(result: ExecuteResult):
    if result.error is None:
        return result
    return JSONResponse(
        status_code=(
            status.HTTP_504_GATEWAY_TIMEOUT if result.error.error_type == "timeout"
            else status.HTTP_502_BAD_GATEWAY
        ),
        content={
            "detail": result.error.error,
            "error_code": "TRANSPORT_ERROR",
            **result.model_dump(mode="json"),
        },
    )


@router.post("", response_model=ExecuteResult, responses=_RESPONSES)
async def execute_composer(
    request: ExecuteRequest,
    store: WorkspaceStore = Depends(get_store),
    transport: Transport = Depends(get_transport)
):
    """
    Execute the live composer state.

    Variables come from ``environment_id`` when given, otherwise from the
    active environment.

    Returns:
        ExecuteResult with the response snapshot and the recorded history entry
    """
    composer = ComposerState.model_validate(request.model_dump(exclude={"environment_id"}))
    result = await execute_request(
        composer,
        store=store,
        transport=transport,
        environment_id=request.environment_id,
    )
    return _to_response(result)


@router.post("/{request_id}", response_model=ExecuteResult, responses=_RESPONSES)
async def execute_saved_request(
    request_id: str,
    options: ExecuteOptions | None = None,
    store: WorkspaceStore = Depends(get_store),
    transport: Transport = Depends(get_transport)
):
    """
    Execute a saved request by ID.

    Raises:
        ResourceNotFoundError: 404 if request not found
    """
    saved = store.get_saved_request(request_id)
    if saved is None:
        raise ResourceNotFoundError("Request", request_id)

    environment_id = options.environment_id if options else None
    result = await execute_request(
        saved.to_composer(),
        store=store,
        transport=transport,
        environment_id=environment_id,
    )
    return _to_response(result)
