"""
Pydantic schemas package.

Exports all schemas for API request/response validation and storage.
"""

from .request import (
    HttpMethod,
    KeyValueRow,
    HeaderRow,
    ParamRow,
    NoAuth,
    BearerAuth,
    BasicAuth,
    AuthState,
    ComposerState,
    RequestDescriptor,
    SavedRequestCreate,
    SavedRequestUpdate,
    SavedRequest,
)

from .environment import (
    VariableBase,
    VariableCreate,
    VariableUpdate,
    Variable,
    EnvironmentCreate,
    EnvironmentUpdate,
    Environment,
    EnvironmentListResponse,
)

from .history import (
    HistoryEntry,
    HistoryListResponse,
    HistoryComposeResponse,
)

from .execute import (
    ResponseHeader,
    RawResponse,
    ResponseSnapshot,
    ExecuteOptions,
    ExecuteRequest,
    ExecuteErrorResponse,
    ExecuteResult,
    ParseParamsRequest,
    BuildUrlRequest,
    BuildUrlResponse,
    RenderBodyRequest,
    RenderBodyResponse,
)

__all__ = [
    # Request schemas
    "HttpMethod",
    "KeyValueRow",
    "HeaderRow",
    "ParamRow",
    "NoAuth",
    "BearerAuth",
    "BasicAuth",
    "AuthState",
    "ComposerState",
    "RequestDescriptor",
    "SavedRequestCreate",
    "SavedRequestUpdate",
    "SavedRequest",
    # Environment schemas
    "VariableBase",
    "VariableCreate",
    "VariableUpdate",
    "Variable",
    "EnvironmentCreate",
    "EnvironmentUpdate",
    "Environment",
    "EnvironmentListResponse",
    # History schemas
    "HistoryEntry",
    "HistoryListResponse",
    "HistoryComposeResponse",
    # Execute schemas
    "ResponseHeader",
    "RawResponse",
    "ResponseSnapshot",
    "ExecuteOptions",
    "ExecuteRequest",
    "ExecuteErrorResponse",
    "ExecuteResult",
    "ParseParamsRequest",
    "BuildUrlRequest",
    "BuildUrlResponse",
    "RenderBodyRequest",
    "RenderBodyResponse",
]
