from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, Union

from .api import ProjectAPIClient, ProjectAPIError
from .query import ProjectQuery
from .schemas import Project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"


def log_notification(notification: Notification) -> None:
    level = logging.WARNING if notification.variant == "destructive" else logging.INFO
    logger.log(level, "%s: %s", notification.title, notification.description)


Notify = Callable[[Notification], None]


class CreateProjectMutation:
    """Upload a reference video and create its project."""

    def __init__(self, client: ProjectAPIClient, *, notify: Notify = log_notification):
        self.client = client
        self.notify = notify
        self.is_pending = False

    def mutate(self, video: Union[str, BinaryIO], filename: Optional[str] = None) -> Project:
        self.is_pending = True
        try:
            project = self.client.create_project(video, filename)
        except ProjectAPIError as e:
            self.notify(Notification("Upload Failed", e.message, variant="destructive"))
            raise
        finally:
            self.is_pending = False

        self.notify(Notification("Video Uploaded", "Your project is ready for processing."))
        return project


class ProcessProjectMutation:
    """Start processing a project and refresh the query watching it."""

    def __init__(
        self,
        client: ProjectAPIClient,
        query: Optional[ProjectQuery] = None,
        *,
        notify: Notify = log_notification,
    ):
        self.client = client
        self.query = query
        self.notify = notify
        self.is_pending = False

    def mutate(self, project_id: int) -> Project:
        self.is_pending = True
        try:
            project = self.client.process_project(project_id)
        except ProjectAPIError as e:
            self.notify(Notification("Processing Error", e.message, variant="destructive"))
            raise
        finally:
            self.is_pending = False

        if self.query is not None and self.query.project_id == project.id:
            self.query.invalidate()
        self.notify(Notification("Processing Started", "Extracting motion and frames..."))
        return project
