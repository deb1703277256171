import logging

from celery import shared_task
from django.apps import apps

from .exceptions import ProjectNotFound

logger = logging.getLogger(__name__)


@shared_task
def complete_project_task(project_id: int):
    trigger = apps.get_app_config("projects").trigger
    try:
        project = trigger.complete(project_id)
    except ProjectNotFound:
        logger.warning("Project %s not found", project_id)
        return f"Project {project_id} not found"
    return project.status
