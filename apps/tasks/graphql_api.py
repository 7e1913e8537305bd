"""
Tasks GraphQL endpoint.

    query    { tasks { id title done } }
    query    ($id: ID!) { task(id: $id) { id title done } }
    mutation ($title: String!) { addTask(title: $title) { id title done } }
    mutation ($id: ID!) { toggleTask(id: $id) { id title done } }
    mutation ($id: ID!) { deleteTask(id: $id) }

Resolvers delegate to the TaskService placed in the request context by
TaskGraphQLView. A failed operation yields {"errors": [...], "data": null}
and the HTTP status of the matching REST error.
"""
import logging
from typing import Callable, List, Optional, TypeVar

import strawberry
from graphql import GraphQLError
from strawberry.django.views import GraphQLView
from strawberry.types import Info

from .dtos import TaskDTO
from .exceptions import StoreUnavailable, TaskError
from .services import TaskService

logger = logging.getLogger(__name__)

T = TypeVar("T")


@strawberry.type(name="Task")
class TaskType:
    id: strawberry.ID
    title: str
    done: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_dto(cls, dto: TaskDTO) -> "TaskType":
        return cls(
            id=strawberry.ID(dto.id),
            title=dto.title,
            done=dto.done,
            created_at=dto.created_at_text,
            updated_at=dto.updated_at_text,
        )


def _service(info: Info) -> TaskService:
    return info.context["service"]


def _run(info: Info, operation: Callable[..., T], *args) -> T:
    """Call a service operation, turning TaskError into a GraphQL error."""
    try:
        return operation(*args)
    except TaskError as exc:
        response = info.context.get("response")
        if response is not None:
            response.status_code = exc.status_code
        raise GraphQLError(exc.message, original_error=exc, extensions={"code": exc.code}) from exc


@strawberry.type
class Query:
    @strawberry.field(description="All tasks, newest first.")
    def tasks(self, info: Info) -> List[TaskType]:
        return [TaskType.from_dto(t) for t in _run(info, _service(info).list_tasks)]

    @strawberry.field(description="A single task, or null when the id matches nothing.")
    def task(self, info: Info, id: strawberry.ID) -> Optional[TaskType]:
        dto = _run(info, _service(info).find_task, str(id))
        return TaskType.from_dto(dto) if dto else None


@strawberry.type
class Mutation:
    @strawberry.mutation
    def add_task(self, info: Info, title: str) -> TaskType:
        return TaskType.from_dto(_run(info, _service(info).create_task, title))

    @strawberry.mutation
    def toggle_task(self, info: Info, id: strawberry.ID) -> TaskType:
        return TaskType.from_dto(_run(info, _service(info).toggle_task, str(id)))

    @strawberry.mutation
    def delete_task(self, info: Info, id: strawberry.ID) -> bool:
        return _run(info, _service(info).delete_task, str(id))


def _task_error(error: GraphQLError) -> Optional[TaskError]:
    """The TaskError behind a located GraphQL error, if there is one."""
    cause = error.original_error
    while isinstance(cause, GraphQLError):
        cause = cause.original_error
    return cause if isinstance(cause, TaskError) else None


class TaskSchema(strawberry.Schema):
    """Logs client errors as one-line warnings; keeps tracebacks for real failures."""

    def process_errors(self, errors, execution_context=None) -> None:
        unexpected = []
        for error in errors:
            task_error = _task_error(error)
            if task_error is None or isinstance(task_error, StoreUnavailable):
                unexpected.append(error)
            else:
                logger.warning(f"GraphQL {error.path} rejected: {task_error.message}")
        super().process_errors(unexpected, execution_context)


schema = TaskSchema(query=Query, mutation=Mutation)


class TaskGraphQLView(GraphQLView):
    """GraphQL view carrying the TaskService its resolvers use."""
    service: Optional[TaskService] = None

    def get_context(self, request, response):
        return {"request": request, "response": response, "service": self.service}
