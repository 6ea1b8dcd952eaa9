"""
Saved request API routes.

Provides CRUD operations for named snapshots of the composer form.
"""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_store
from ..exceptions import ResourceNotFoundError
from ..schemas.request import SavedRequest, SavedRequestCreate, SavedRequestUpdate
from ..services.workspace_store import WorkspaceStore


router = APIRouter(prefix="/api/requests", tags=["requests"])


@router.post("", response_model=SavedRequest, status_code=status.HTTP_201_CREATED)
def save_request(request_data: SavedRequestCreate, store: WorkspaceStore = Depends(get_store)):
    """
    Save a copy of the given composer state under a name.

    Later edits to the live composer never affect the saved copy.

    Args:
        request_data: Name plus the composer fields to save
        store: Workspace store

    Returns:
        The saved request with its assigned ID
    """
    return store.save_request(request_data.name, request_data)


@router.get("", response_model=list[SavedRequest])
def list_requests(store: WorkspaceStore = Depends(get_store)):
    """List all saved requests in insertion order."""
    return store.saved_requests


@router.get("/{request_id}", response_model=SavedRequest)
def get_request(request_id: str, store: WorkspaceStore = Depends(get_store)):
    """
    Get a single saved request by ID.

    Raises:
        ResourceNotFoundError: 404 if request not found
    """
    saved = store.get_saved_request(request_id)
    if saved is None:
        raise ResourceNotFoundError("Request", request_id)
    return saved


@router.put("/{request_id}", response_model=SavedRequest)
def update_request(
    request_id: str,
    request_data: SavedRequestUpdate,
    store: WorkspaceStore = Depends(get_store)
):
    """
    Overwrite fields of a saved request.

    Args:
        request_id: The unique identifier of the saved request
        request_data: Fields to update (only provided fields are updated)
        store: Workspace store

    Returns:
        The updated saved request

    Raises:
        ResourceNotFoundError: 404 if request not found
    """
    saved = store.get_saved_request(request_id)
    if saved is None:
        raise ResourceNotFoundError("Request", request_id)

    update_data = request_data.model_dump(exclude_unset=True, exclude_none=True)
    updated = SavedRequest.model_validate({**saved.model_dump(), **update_data})
    return store.update_saved_request(updated)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_request(request_id: str, store: WorkspaceStore = Depends(get_store)):
    """
    Delete a saved request by ID.

    Raises:
        ResourceNotFoundError: 404 if request not found
    """
    if not store.remove_saved_request(request_id):
        raise ResourceNotFoundError("Request", request_id)
    return None
