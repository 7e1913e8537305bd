"""
Tasks REST endpoints.

    GET    /tasks               -> 200 [Task]
    POST   /tasks               -> 201 Task | 400 {"error": "title required"}
    PATCH  /tasks/{id}/toggle   -> 200 Task | 404 {"error": "not found"}
    DELETE /tasks/{id}          -> 200 {"ok": true} | 404 {"error": "not found"}

Routes only translate HTTP to TaskService calls. Failures raised by the
service are rendered by the handlers installed with
register_exception_handlers().
"""
import logging
from typing import List

from django.http import HttpRequest
from ninja import NinjaAPI, Router, Status
from ninja.errors import HttpError
from ninja.errors import ValidationError as RequestValidationError

from .dtos import ErrorOut, OkOut, TaskIn, TaskOut
from .exceptions import StoreUnavailable, TaskError
from .services import TaskService

logger = logging.getLogger(__name__)


def build_router(service: TaskService) -> Router:
    """Create the /tasks router bound to a specific TaskService."""
    router = Router(tags=["Tasks"])

    @router.get("", response=List[TaskOut])
    def list_tasks_api(request: HttpRequest):
        """List all tasks, newest first."""
        return service.list_tasks()

    @router.post("", response={201: TaskOut, 400: ErrorOut, 500: ErrorOut})
    def create_task_api(request: HttpRequest, payload: TaskIn):
        """Create a task. The title is trimmed and must not be blank."""
        return Status(201, service.create_task(payload.title))

    @router.patch("/{task_id}/toggle", response={200: TaskOut, 404: ErrorOut, 500: ErrorOut})
    def toggle_task_api(request: HttpRequest, task_id: str):
        """Flip the `done` flag of a task."""
        return service.toggle_task(task_id)

    @router.delete("/{task_id}", response={200: OkOut, 404: ErrorOut, 500: ErrorOut})
    def delete_task_api(request: HttpRequest, task_id: str):
        """Permanently delete a task."""
        service.delete_task(task_id)
        return {"ok": True}

    return router


def register_exception_handlers(api: NinjaAPI) -> None:
    """Render task errors as {"error": message} with the error's status code."""

    @api.exception_handler(TaskError)
    def handle_task_error(request: HttpRequest, exc: TaskError):
        if isinstance(exc, StoreUnavailable):
            logger.error(f"{request.method} {request.path} failed: store unavailable", exc_info=exc)
        return api.create_response(request, {"error": exc.message}, status=exc.status_code)

    @api.exception_handler(RequestValidationError)
    def handle_request_validation_error(request: HttpRequest, exc: RequestValidationError):
        logger.warning(f"{request.method} {request.path} rejected: {exc.errors}")
        return api.create_response(request, {"error": "invalid request body"}, status=400)

    @api.exception_handler(HttpError)
    def handle_http_error(request: HttpRequest, exc: HttpError):
        # ninja raises HttpError(400) for bodies it cannot parse (e.g. non-JSON)
        message = "invalid request body" if exc.status_code == 400 else exc.message
        logger.warning(f"{request.method} {request.path} rejected: {exc.message}")
        return api.create_response(request, {"error": message}, status=exc.status_code)
