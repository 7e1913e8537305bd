"""
Task operations shared by every protocol.

Both the REST router (apps.tasks.api) and the GraphQL schema
(apps.tasks.graphql_api) call a TaskService instance and nothing else, so
validation, id handling and not-found rules live only here.

Usage:
    from apps.tasks.services import TaskService
    from apps.tasks.store import DjangoTaskStore

    service = TaskService(DjangoTaskStore())
    task = service.create_task("Learn GraphQL")
    service.toggle_task(task.id)
"""
import logging
from typing import List, Optional
from uuid import UUID

from .dtos import TaskDTO
from .exceptions import TaskNotFound, TaskValidationError
from .identifiers import InvalidIdentifier, to_external, to_internal
from .models import TITLE_MAX_LENGTH, Task
from .store import TaskStoreInterface

logger = logging.getLogger(__name__)


def task_to_dto(task: Task) -> TaskDTO:
    return TaskDTO(
        id=to_external(task.id),
        title=task.title,
        done=task.done,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


class TaskService:
    """
    Protocol-agnostic task operations.

    Errors:
        TaskValidationError: bad input, raised before any store write.
        TaskNotFound: malformed id, or no live task with that id.
        StoreUnavailable: propagated unchanged from the store.
    """

    def __init__(self, store: TaskStoreInterface):
        self.store = store

    # =========================================================================
    # Reads
    # =========================================================================

    def list_tasks(self) -> List[TaskDTO]:
        """All tasks, newest first."""
        return [task_to_dto(task) for task in self.store.list_all()]

    def find_task(self, task_id: str) -> Optional[TaskDTO]:
        """Lookup semantics: a malformed or unknown id is simply absent."""
        try:
            internal_id = to_internal(task_id)
        except InvalidIdentifier:
            return None

        task = self.store.find_by_id(internal_id)
        return task_to_dto(task) if task else None

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_task(self, title) -> TaskDTO:
        title = self._clean_title(title)
        task = self.store.create(title)
        logger.info(f"Created task {task.id}")
        return task_to_dto(task)

    def toggle_task(self, task_id: str) -> TaskDTO:
        internal_id = self._resolve_id(task_id)
        task = self.store.flip_done(internal_id)
        if task is None:
            logger.warning(f"Toggle rejected: task {task_id} not found")
            raise TaskNotFound()
        logger.info(f"Toggled task {task.id} -> done={task.done}")
        return task_to_dto(task)

    def delete_task(self, task_id: str) -> bool:
        internal_id = self._resolve_id(task_id)
        if not self.store.delete_by_id(internal_id):
            logger.warning(f"Delete rejected: task {task_id} not found")
            raise TaskNotFound()
        logger.info(f"Deleted task {internal_id}")
        return True

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _clean_title(title) -> str:
        if not isinstance(title, str) or not title.strip():
            logger.warning("Create rejected: blank title")
            raise TaskValidationError("title required")

        title = title.strip()
        if len(title) > TITLE_MAX_LENGTH:
            logger.warning(f"Create rejected: title length {len(title)}")
            raise TaskValidationError(
                f"title must be at most {TITLE_MAX_LENGTH} characters"
            )
        return title

    @staticmethod
    def _resolve_id(task_id) -> UUID:
        try:
            return to_internal(task_id)
        except InvalidIdentifier:
            logger.warning(f"Rejected malformed task id {task_id!r}")
            raise TaskNotFound()
