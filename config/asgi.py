"""
ASGI config for the task service.

Works with any ASGI server, e.g.:
    uvicorn config.asgi:application
"""
import atexit
import logging
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

logger = logging.getLogger(__name__)

# Initialize Django before the first request arrives
application = get_asgi_application()

# The store shared by both protocols is opened at startup and closed on exit
from config.urls import task_store  # noqa: E402

task_store.connect()
atexit.register(task_store.disconnect)
logger.info("Task service ready")
