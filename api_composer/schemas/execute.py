"""
Pydantic schemas for request execution.

Defines the raw transport response, the normalized response snapshot and
the result of an execution attempt.
"""

from typing import Literal

from pydantic import BaseModel

from .history import HistoryEntry
from .request import ComposerState, ParamRow


class ResponseHeader(BaseModel):
    key: str
    value: str


class RawResponse(BaseModel):
    """A complete response as returned by the transport."""
    status: int
    status_text: str = ""
    headers: list[ResponseHeader] = []
    body_text: str = ""

    def header(self, name: str) -> str | None:
        """Case-insensitive lookup of the first header named ``name``."""
        lowered = name.lower()
        for header in self.headers:
            if header.key.lower() == lowered:
                return header.value
        return None


class ResponseSnapshot(BaseModel):
    """
    Normalized, fully materialized response data.

    ``body`` is the display form, ``raw_body`` the untransformed text;
    ``size`` is the UTF-8 byte length of ``raw_body`` and
    ``size_label`` its human-readable form.
    """
    ok: bool
    status: int
    status_text: str
    time_ms: int
    size: int
    headers: list[ResponseHeader]
    body: str
    raw_body: str
    content_type: str
    size_label: str = ""


class ExecuteOptions(BaseModel):
    """Schema for execution options."""
    environment_id: str | None = None


class ExecuteRequest(ComposerState):
    """Schema for executing the live composer state."""
    environment_id: str | None = None


ErrorType = Literal["network_error", "timeout", "invalid_url", "unknown"]


class ExecuteErrorResponse(BaseModel):
    """Schema for a transport failure."""
    error: str
    error_type: ErrorType
    details: str | None = None


class ExecuteResult(BaseModel):
    """Outcome of one send attempt: exactly one of ``response`` or ``error`` is set."""
    response: ResponseSnapshot | None = None
    error: ExecuteErrorResponse | None = None
    history_entry: HistoryEntry


# Composer helper schemas

class ParseParamsRequest(BaseModel):
    url: str


class BuildUrlRequest(BaseModel):
    url: str
    params: list[ParamRow] = []


class BuildUrlResponse(BaseModel):
    url: str


class RenderBodyRequest(BaseModel):
    raw_body: str
    content_type: str = "unknown"
    view: Literal["pretty", "raw"] = "pretty"


class RenderBodyResponse(BaseModel):
    body: str
