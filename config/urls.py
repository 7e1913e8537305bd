"""
URL configuration for the task service.

One TaskService (over one store) is built here and handed to both the REST
router and the GraphQL view, so the two protocols share every rule.
"""
from django.contrib import admin
from django.urls import path
from django.views.decorators.csrf import csrf_exempt
from ninja import NinjaAPI

from apps.tasks.api import build_router, register_exception_handlers
from apps.tasks.graphql_api import TaskGraphQLView, schema
from apps.tasks.services import TaskService
from apps.tasks.store import DjangoTaskStore

task_store = DjangoTaskStore()
task_service = TaskService(task_store)

api = NinjaAPI(
    title="Tasks API",
    version="1.0.0",
    description="Task list exposed over REST and GraphQL",
    docs_url="/docs",
)
register_exception_handlers(api)
api.add_router("/tasks", build_router(task_service))

urlpatterns = [
    path('admin/', admin.site.urls),
    path('graphql', csrf_exempt(TaskGraphQLView.as_view(schema=schema, service=task_service))),
    path('', api.urls),
]
