from __future__ import annotations

from .base import PersistentObject


class DatastoreDelegate:
    """
    Observer of datastore changes, e.g. to refresh a UI without a view model.

    Override any of the hooks; the others do nothing. Hooks run synchronously on
    the calling thread after the change has been written, once per operation.
    Failed operations never reach a delegate.
    """

    def did_object_added(self, persistent_object: PersistentObject) -> None:
        pass

    def did_object_updated(self, persistent_object: PersistentObject) -> None:
        pass

    def did_object_removed(self, persistent_object: PersistentObject) -> None:
        pass
