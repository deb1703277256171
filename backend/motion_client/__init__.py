from .api import ProjectAPIClient, ProjectAPIError
from .mutations import CreateProjectMutation, Notification, ProcessProjectMutation
from .query import POLL_INTERVAL_SECONDS, ProjectQuery
from .schemas import ACTIVE_STATUSES, Project

__all__ = [
    "ACTIVE_STATUSES",
    "CreateProjectMutation",
    "Notification",
    "POLL_INTERVAL_SECONDS",
    "ProcessProjectMutation",
    "Project",
    "ProjectAPIClient",
    "ProjectAPIError",
    "ProjectQuery",
]
