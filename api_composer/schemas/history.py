"""
Pydantic schemas for request execution history.

Defines the stored history entry and the list/compose responses.
"""

from pydantic import BaseModel, Field

from ..ids import create_id
from .request import HttpMethod, ParamRow


class HistoryEntry(BaseModel):
    """
    One send attempt.

    ``status`` is absent when the transport failed; ``timestamp`` is in
    epoch milliseconds.
    """
    id: str = Field(default_factory=create_id)
    method: HttpMethod
    url: str
    status: int | None = None
    time_ms: int | None = None
    timestamp: int


class HistoryListResponse(BaseModel):
    """Schema for the history list response."""
    items: list[HistoryEntry]
    total: int


class HistoryComposeResponse(BaseModel):
    """Composer fields restored from a history entry."""
    method: HttpMethod
    url: str
    params: list[ParamRow]
