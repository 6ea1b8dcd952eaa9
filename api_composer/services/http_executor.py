"""
HTTP execution service for sending composed requests.

This service handles the actual HTTP request execution using httpx,
timing, response normalization and history recording.
"""

import time
from typing import Protocol

import httpx
from loguru import logger

from ..config import REQUEST_TIMEOUT
from ..exceptions import ResourceNotFoundError, TransportError
from ..schemas.environment import Variable
from ..schemas.execute import (
    ExecuteErrorResponse,
    ExecuteResult,
    RawResponse,
    ResponseHeader,
)
from ..schemas.history import HistoryEntry
from ..schemas.request import ComposerState, RequestDescriptor
from .request_assembler import assemble_request
from .response_normalizer import normalize_response
from .workspace_store import WorkspaceStore

GENERIC_FAILURE_MESSAGE = "Request failed."


class Transport(Protocol):
    """Sends one request and returns the complete response."""

    async def send(self, request: RequestDescriptor) -> RawResponse:
        ...


class HttpxTransport:
    """
    Transport backed by ``httpx.AsyncClient``.

    Args:
        timeout: Request timeout in seconds
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
    """

    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None
    ):
        self.timeout = timeout
        self._transport = transport

    async def send(self, request: RequestDescriptor) -> RawResponse:
        """
        Send ``request``.

        Raises:
            TransportError: on timeouts, connection failures, invalid URLs
                and any other httpx error
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True
            ) as client:
                response = await client.request(
                    method=request.method,
                    url=request.url,
                    headers=request.headers,
                    content=request.body,
                )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request exceeded {self.timeout} seconds timeout",
                error_type="timeout",
                details=str(e) or None,
            ) from e
        except httpx.InvalidURL as e:
            raise TransportError(str(e) or "Invalid URL", error_type="invalid_url", details=str(e)) from e
        except httpx.UnsupportedProtocol as e:
            raise TransportError(str(e) or "Invalid URL", error_type="invalid_url", details=str(e)) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or GENERIC_FAILURE_MESSAGE, details=str(e) or None) from e
        except Exception as e:
            # e.g. header values httpx cannot encode
            raise TransportError(str(e) or GENERIC_FAILURE_MESSAGE, error_type="unknown", details=str(e) or None) from e

        return RawResponse(
            status=response.status_code,
            status_text=response.reason_phrase or "",
            headers=[ResponseHeader(key=key, value=value) for key, value in response.headers.multi_items()],
            body_text=response.text,
        )


def get_environment_variables(store: WorkspaceStore, environment_id: str | None) -> list[Variable]:
    """
    Get variables of the specified environment or of the active environment.

    Raises:
        ResourceNotFoundError: if ``environment_id`` is given but unknown
    """
    if environment_id is None:
        return store.active_variables()

    environment = store.get_environment(environment_id)
    if environment is None:
        raise ResourceNotFoundError("Environment", environment_id)
    return list(environment.variables)


def _now_ms() -> int:
    return int(time.time() * 1000)


async def execute_request(
    composer: ComposerState,
    store: WorkspaceStore,
    transport: Transport,
    environment_id: str | None = None
) -> ExecuteResult:
    """
    Assemble, send and record one request.

    Local validation errors propagate before anything is sent or recorded.
    Every send attempt, successful or not, is pushed to history.

    Args:
        composer: The request form to execute
        store: Workspace store providing variables and receiving history
        transport: Transport used to send the request
        environment_id: Specific environment ID, or None to use the active environment

    Returns:
        ExecuteResult carrying either the response snapshot or the error,
        plus the recorded history entry

    Raises:
        EmptyUrlError: if the URL is empty
        MalformedUrlError: if the final URL cannot be composed
        ResourceNotFoundError: if ``environment_id`` is unknown
    """
    variables = get_environment_variables(store, environment_id)
    descriptor = assemble_request(composer, variables)
    method = descriptor.method

    logger.info("Sending {} {}", method, descriptor.url)
    start_time = time.perf_counter()
    try:
        raw = await transport.send(descriptor)
    except TransportError as e:
        elapsed = round((time.perf_counter() - start_time) * 1000)
        logger.warning("{} {} failed after {} ms: {}", method, descriptor.url, elapsed, e.detail)
        entry = HistoryEntry(method=method, url=descriptor.url, time_ms=elapsed, timestamp=_now_ms())
        store.push_history(entry)
        return ExecuteResult(
            error=ExecuteErrorResponse(
                error=e.detail or GENERIC_FAILURE_MESSAGE,
                error_type=e.error_type,
                details=e.details,
            ),
            history_entry=entry,
        )

    elapsed = round((time.perf_counter() - start_time) * 1000)
    snapshot = normalize_response(raw, elapsed)
    logger.info("{} {} -> {} in {} ms", method, descriptor.url, raw.status, elapsed)

    entry = HistoryEntry(
        method=method,
        url=descriptor.url,
        status=raw.status,
        time_ms=elapsed,
        timestamp=_now_ms(),
    )
    store.push_history(entry)
    return ExecuteResult(response=snapshot, history_entry=entry)
