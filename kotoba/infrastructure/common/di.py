import threading
from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from kotoba.core import container
from kotoba.database import DatabaseSession

T = TypeVar("T")

# container.db is one provider shared by every worker thread
_override_lock = threading.Lock()


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Turn a container provider into a FastAPI dependency.

    The use case is built while ``container.db`` points at the request's
    session. Building happens under a lock, so two requests never see each
    other's session.
    """

    def dependency(db: DatabaseSession) -> T:
        with _override_lock, container.db.override(db):
            return provider()

    return dependency
