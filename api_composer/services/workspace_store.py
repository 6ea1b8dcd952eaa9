"""
Workspace store for history, environments and saved requests.

One store is constructed per process and passed explicitly to whatever
composes or executes requests. Each collection is loaded once at
construction and written through to the blob store, in full, after every
mutation. Mutations are synchronous read-modify-write steps with no
suspension point inside them.
"""

from typing import TypeVar

from loguru import logger
from pydantic import TypeAdapter

from ..config import (
    COLLECTION_STORAGE_KEY,
    ENV_STORAGE_KEY,
    HISTORY_LIMIT,
    HISTORY_STORAGE_KEY,
)
from ..schemas.environment import Environment, Variable
from ..schemas.history import HistoryEntry
from ..schemas.request import ComposerState, SavedRequest
from .blob_store import BlobStore

DEFAULT_ENVIRONMENT_ID = "env-default"
DEFAULT_ENVIRONMENT_NAME = "Local"

_history_adapter = TypeAdapter(list[HistoryEntry])
_environments_adapter = TypeAdapter(list[Environment])
_saved_requests_adapter = TypeAdapter(list[SavedRequest])

T = TypeVar("T")


def default_environment() -> Environment:
    return Environment(id=DEFAULT_ENVIRONMENT_ID, name=DEFAULT_ENVIRONMENT_NAME, variables=[])


class WorkspaceStore:
    """
    Owns the three persisted collections and the active environment.

    Attributes:
        history_limit: Maximum number of history entries kept
        active_environment_id: Id of the active environment, or None
    """

    def __init__(self, blob_store: BlobStore, history_limit: int = HISTORY_LIMIT):
        self._blobs = blob_store
        self.history_limit = history_limit

        self._history: list[HistoryEntry] = self._load(HISTORY_STORAGE_KEY, _history_adapter) or []
        self._saved_requests: list[SavedRequest] = (
            self._load(COLLECTION_STORAGE_KEY, _saved_requests_adapter) or []
        )

        environments = self._load(ENV_STORAGE_KEY, _environments_adapter)
        if environments is None:
            self._environments = [default_environment()]
            self.active_environment_id: str | None = DEFAULT_ENVIRONMENT_ID
        else:
            self._environments = environments
            self.active_environment_id = environments[0].id if environments else None

    def _load(self, key: str, adapter: TypeAdapter[list[T]]) -> list[T] | None:
        data = self._blobs.load(key)
        if data is None:
            return None
        try:
            return adapter.validate_json(data)
        except ValueError as exc:
            logger.warning("Ignoring malformed stored data under {}: {}", key, exc)
            return None

    def _persist(self, key: str, adapter: TypeAdapter[list[T]], items: list[T]) -> None:
        self._blobs.save(key, adapter.dump_json(items))

    # History

    @property
    def history(self) -> list[HistoryEntry]:
        return list(self._history)

    def push_history(self, entry: HistoryEntry) -> list[HistoryEntry]:
        """Prepend ``entry``, keep the newest ``history_limit`` entries, persist."""
        self._history = [entry, *self._history][:self.history_limit]
        self._persist(HISTORY_STORAGE_KEY, _history_adapter, self._history)
        return self.history

    def clear_history(self) -> None:
        self._history = []
        self._blobs.remove(HISTORY_STORAGE_KEY)

    def get_history_entry(self, entry_id: str) -> HistoryEntry | None:
        return next((entry for entry in self._history if entry.id == entry_id), None)

    # Environments

    @property
    def environments(self) -> list[Environment]:
        return list(self._environments)

    def get_environment(self, environment_id: str) -> Environment | None:
        return next((env for env in self._environments if env.id == environment_id), None)

    def add_environment(
        self,
        name: str | None = None,
        variables: list[Variable] | None = None
    ) -> Environment:
        """Append a new environment, named ``Env <n>`` when no name is given."""
        environment = Environment(
            name=name or f"Env {len(self._environments) + 1}",
            variables=variables or [],
        )
        self._environments = [*self._environments, environment]
        self._persist(ENV_STORAGE_KEY, _environments_adapter, self._environments)
        return environment

    def update_environment(self, environment: Environment) -> Environment | None:
        """Replace the environment with the same id. Returns None if there is none."""
        if self.get_environment(environment.id) is None:
            return None
        self._environments = [
            environment if env.id == environment.id else env
            for env in self._environments
        ]
        self._persist(ENV_STORAGE_KEY, _environments_adapter, self._environments)
        return environment

    def remove_environment(self, environment_id: str) -> bool:
        """
        Remove an environment.

        Removing the active environment activates the first remaining one,
        or none when the list becomes empty.
        """
        if self.get_environment(environment_id) is None:
            return False
        self._environments = [env for env in self._environments if env.id != environment_id]
        self._persist(ENV_STORAGE_KEY, _environments_adapter, self._environments)
        if self.active_environment_id == environment_id:
            self.active_environment_id = self._environments[0].id if self._environments else None
        return True

    def set_active_environment(self, environment_id: str | None) -> bool:
        if environment_id is not None and self.get_environment(environment_id) is None:
            return False
        self.active_environment_id = environment_id
        return True

    @property
    def active_environment(self) -> Environment | None:
        if self.active_environment_id is None:
            return None
        return self.get_environment(self.active_environment_id)

    def active_variables(self) -> list[Variable]:
        environment = self.active_environment
        return list(environment.variables) if environment else []

    # Saved requests

    @property
    def saved_requests(self) -> list[SavedRequest]:
        return list(self._saved_requests)

    def get_saved_request(self, request_id: str) -> SavedRequest | None:
        return next((req for req in self._saved_requests if req.id == request_id), None)

    def save_request(self, name: str, composer: ComposerState) -> SavedRequest:
        """Append a deep copy of ``composer`` under ``name``."""
        saved = SavedRequest(name=name, **composer.model_dump(include=set(ComposerState.model_fields)))
        self._saved_requests = [*self._saved_requests, saved]
        self._persist(COLLECTION_STORAGE_KEY, _saved_requests_adapter, self._saved_requests)
        return saved

    def update_saved_request(self, saved: SavedRequest) -> SavedRequest | None:
        """Overwrite the saved request with the same id. Returns None if there is none."""
        if self.get_saved_request(saved.id) is None:
            return None
        saved = saved.model_copy(deep=True)
        self._saved_requests = [
            saved if req.id == saved.id else req
            for req in self._saved_requests
        ]
        self._persist(COLLECTION_STORAGE_KEY, _saved_requests_adapter, self._saved_requests)
        return saved

    def remove_saved_request(self, request_id: str) -> bool:
        if self.get_saved_request(request_id) is None:
            return False
        self._saved_requests = [req for req in self._saved_requests if req.id != request_id]
        self._persist(COLLECTION_STORAGE_KEY, _saved_requests_adapter, self._saved_requests)
        return True
