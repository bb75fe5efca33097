# farmconnect/celery_worker.py
from celery import Celery

from farmconnect.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "farmconnect",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks live outside this module, import them explicitly so the worker registers them
celery_app.conf.imports = (
    "farmconnect.services.notification_service",
)

celery_app.conf.timezone = "UTC"
