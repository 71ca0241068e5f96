# core/store.py

"""
The EntityStore is the single owner of the current `AppState` snapshot.

Mutation operations in `core.mutations` are pure; the store runs them against its current
snapshot, and on success swaps in a new snapshot, notifies subscribers, and writes it through the
persistence collaborator. Snapshots are never modified in place, so any reference a caller holds
stays consistent with the moment it was read.
"""

from __future__ import annotations

from typing import Any, Callable

import core.mutations as mutations
from core.logger import get_logger
from core.response import Response
from core.storage import JsonStorage, dump_backup, restore_backup
from models.app_state import AppState

log = get_logger(__name__)

Subscriber = Callable[[AppState], None]

COLLECTIONS = ("students", "teachers", "lesson_plans", "attendances", "grades")


class EntityStore:

    def __init__(self, storage: JsonStorage, state: AppState | None = None):
        self._storage = storage
        self._state: AppState = state if state is not None else AppState.empty()
        self._subscribers: list[Subscriber] = []

    # === public classmethods ===

    @classmethod
    def load(cls, storage: JsonStorage) -> EntityStore:
        return cls(storage, storage.load())

    # === properties ===

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def storage(self) -> JsonStorage:
        return self._storage

    # === subscriptions ===

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Registers `callback` to be called with every new snapshot.

        Returns:
            A callable that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # === snapshot replacement ===

    def replace(self, new_state: AppState) -> Response:
        """
        Installs `new_state` as the current snapshot, notifies subscribers, and persists it.

        Returns:
            Response: The persistence result. A failed save does not roll back the replacement.
        """
        self._state = new_state
        log.debug("state_replaced", snapshot=repr(new_state))

        for callback in list(self._subscribers):
            callback(new_state)

        return self._storage.save(new_state)

    def apply(
        self,
        collection: str,
        mutation: Callable[..., Response],
        *args: Any,
        **kwargs: Any,
    ) -> Response:
        """
        Runs a collection mutation against the current snapshot and installs the result on success.

        Args:
            collection (str): The `AppState` collection the mutation operates on, e.g. "teachers".
            mutation (Callable[..., Response]): A function from `core.mutations` taking the collection first.
            *args, **kwargs: Forwarded to the mutation after the collection.

        Returns:
            Response: The mutation's response, unchanged. On failure the snapshot is left as it was.

        Raises:
            ValueError: If `collection` is not an `AppState` collection name.
        """
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection '{collection}'.")

        response = mutation(getattr(self._state, collection), *args, **kwargs)

        if response.success:
            self.replace(self._state.replace(**{collection: response.data["records"]}))

        return response

    def set_portal_url(self, portal_url: str) -> Response:
        response = mutations.set_portal_url(self._state, portal_url)
        self.replace(response.data["state"])

        return response

    # === backup and restore ===

    def backup(self, path: str) -> Response:
        return dump_backup(self._state, path)

    def restore(self, path: str) -> Response:
        """
        Replaces the current snapshot with a backup file, leaving it untouched if the backup is invalid.
        """
        response = restore_backup(path)

        if response.success:
            self.replace(response.data["state"])

        return response
