"""
History API routes.

Provides endpoints for viewing and clearing request execution history.
History entries are recorded automatically for every send attempt.
"""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_store
from ..exceptions import ResourceNotFoundError
from ..schemas.history import HistoryComposeResponse, HistoryEntry, HistoryListResponse
from ..services.url_composer import parse_params_from_url
from ..services.workspace_store import WorkspaceStore


router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("", response_model=HistoryListResponse)
def list_history(store: WorkspaceStore = Depends(get_store)):
    """
    Get history entries, newest first.

    Returns:
        HistoryListResponse with items and total count
    """
    items = store.history
    return HistoryListResponse(items=items, total=len(items))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_history(store: WorkspaceStore = Depends(get_store)):
    """Clear all history entries and their stored copy."""
    store.clear_history()
    return None


@router.get("/{entry_id}", response_model=HistoryEntry)
def get_history_entry(entry_id: str, store: WorkspaceStore = Depends(get_store)):
    """
    Get a single history entry by ID.

    Raises:
        ResourceNotFoundError: 404 if history entry not found
    """
    entry = store.get_history_entry(entry_id)
    if entry is None:
        raise ResourceNotFoundError("History entry", entry_id)
    return entry


@router.get("/{entry_id}/compose", response_model=HistoryComposeResponse)
def compose_from_history(entry_id: str, store: WorkspaceStore = Depends(get_store)):
    """
    Restore composer fields from a history entry.

    The params are parsed from the entry's resolved URL.

    Raises:
        ResourceNotFoundError: 404 if history entry not found
    """
    entry = store.get_history_entry(entry_id)
    if entry is None:
        raise ResourceNotFoundError("History entry", entry_id)
    return HistoryComposeResponse(
        method=entry.method,
        url=entry.url,
        params=parse_params_from_url(entry.url),
    )
