"""
FastAPI dependencies giving routes access to the per-process store and transport.

Both objects are created once in the application lifespan and kept on
``app.state``; tests replace them through ``app.dependency_overrides``.
"""

from fastapi import Request

from .services.http_executor import Transport
from .services.workspace_store import WorkspaceStore


def get_store(request: Request) -> WorkspaceStore:
    return request.app.state.store


def get_transport(request: Request) -> Transport:
    return request.app.state.transport
