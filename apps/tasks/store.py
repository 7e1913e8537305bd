"""
Record store for tasks.

TaskStoreInterface is the contract the service layer depends on. The only
production implementation is DjangoTaskStore, backed by the ORM model in
apps.tasks.models.

Contract:
- "Absent" is a normal outcome: lookups return None, deletes return False.
- Database failures are raised as StoreUnavailable and never swallowed.
- Every method touches at most one row, so no multi-row transactions.
"""
import logging
from abc import ABC, abstractmethod
from functools import wraps
from typing import List, Optional
from uuid import UUID

from django.db import DatabaseError, connection, connections
from django.db.models import Case, Value, When
from django.utils import timezone

from .exceptions import StoreUnavailable
from .models import Task

logger = logging.getLogger(__name__)


def _store_operation(method):
    """Translate driver failures into StoreUnavailable."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DatabaseError as e:
            logger.error(f"Task store {method.__name__} failed: {e}")
            raise StoreUnavailable() from e
    return wrapper


class TaskStoreInterface(ABC):
    """
    Abstract record store.

    Implementations take and return store-native ids (UUID); mapping to the
    client-facing form happens in the service layer.
    """

    def connect(self) -> None:
        """Open and verify the underlying connection."""

    def disconnect(self) -> None:
        """Release the underlying connection(s)."""

    @abstractmethod
    def list_all(self) -> List[Task]:
        """All tasks, newest first."""

    @abstractmethod
    def create(self, title: str) -> Task:
        pass

    @abstractmethod
    def find_by_id(self, task_id: UUID) -> Optional[Task]:
        pass

    @abstractmethod
    def set_done(self, task_id: UUID, value: bool) -> Optional[Task]:
        pass

    @abstractmethod
    def flip_done(self, task_id: UUID) -> Optional[Task]:
        """Invert `done` in a single write. Returns the updated task or None."""

    @abstractmethod
    def delete_by_id(self, task_id: UUID) -> bool:
        pass

    @abstractmethod
    def count(self) -> int:
        pass


class DjangoTaskStore(TaskStoreInterface):
    """Task store on top of the Django ORM (`default` database alias)."""

    @_store_operation
    def connect(self) -> None:
        connection.ensure_connection()
        logger.info(f"Task store connected ({connection.vendor})")

    def disconnect(self) -> None:
        connections.close_all()
        logger.info("Task store disconnected")

    @_store_operation
    def list_all(self) -> List[Task]:
        return list(Task.objects.order_by('-created_at', '-id'))

    @_store_operation
    def create(self, title: str) -> Task:
        return Task.objects.create(title=title)

    @_store_operation
    def find_by_id(self, task_id: UUID) -> Optional[Task]:
        try:
            return Task.objects.get(id=task_id)
        except Task.DoesNotExist:
            return None

    @_store_operation
    def set_done(self, task_id: UUID, value: bool) -> Optional[Task]:
        updated = Task.objects.filter(id=task_id).update(
            done=value,
            updated_at=timezone.now(),
        )
        if not updated:
            return None
        return Task.objects.filter(id=task_id).first()

    @_store_operation
    def flip_done(self, task_id: UUID) -> Optional[Task]:
        # queryset.update() skips auto_now, so updated_at is set explicitly
        updated = Task.objects.filter(id=task_id).update(
            done=Case(
                When(done=True, then=Value(False)),
                default=Value(True),
            ),
            updated_at=timezone.now(),
        )
        if not updated:
            return None
        return Task.objects.filter(id=task_id).first()

    @_store_operation
    def delete_by_id(self, task_id: UUID) -> bool:
        deleted, _ = Task.objects.filter(id=task_id).delete()
        return deleted > 0

    @_store_operation
    def count(self) -> int:
        return Task.objects.count()
