"""
Project persistence.

``ProjectStore`` is the contract the API layer and the processing trigger
depend on. ``DatabaseProjectStore`` backs it with the ``projects`` table; a
single instance is built by ``ProjectsConfig.ready`` and handed to its users.
"""

import logging

from .exceptions import InvalidTransition, ProjectNotFound
from .models import Project

logger = logging.getLogger(__name__)


class ProjectStore:
    UPDATABLE_FIELDS = frozenset({
        "identity_frame_url",
        "generated_video_url",
        "status",
        "error",
        "completion_task_id",
    })

    def get(self, project_id: int) -> Project:
        raise NotImplementedError

    def create(self, original_video_url: str) -> Project:
        raise NotImplementedError

    def update(self, project_id: int, **fields) -> Project:
        raise NotImplementedError

    def release(self, project_id: int, task_id: str) -> bool:
        raise NotImplementedError


class DatabaseProjectStore(ProjectStore):

    def get(self, project_id: int) -> Project:
        try:
            return Project.objects.get(pk=project_id)
        except Project.DoesNotExist:
            raise ProjectNotFound(project_id)

    def create(self, original_video_url: str) -> Project:
        project = Project.objects.create(original_video_url=original_video_url)
        logger.info("Created project %s for %s", project.id, original_video_url)
        return project

    def update(self, project_id: int, **fields) -> Project:
        """Merge ``fields`` into the record and return the full updated project.

        A status change is applied only if the stored status may move to the
        new one, checked in the same UPDATE statement.
        """
        unknown = set(fields) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"cannot update fields: {sorted(unknown)}")
        if not fields:
            return self.get(project_id)

        qs = Project.objects.filter(pk=project_id)
        new_status = fields.get("status")
        if new_status is not None:
            qs = qs.filter(status__in=Project.sources_for(new_status))

        if not qs.update(**fields):
            current = self.get(project_id)
            raise InvalidTransition(project_id, current.status, new_status)

        if new_status is not None:
            logger.info("Project %s -> %s", project_id, new_status)
        return self.get(project_id)

    def release(self, project_id: int, task_id: str) -> bool:
        """Put a project back to pending when its completion task was never sent.

        Only applies while the project is still processing under ``task_id``;
        returns False otherwise.
        """
        released = Project.objects.filter(
            pk=project_id,
            status=Project.Status.PROCESSING,
            completion_task_id=task_id,
        ).update(status=Project.Status.PENDING, completion_task_id="")
        if released:
            logger.warning("Project %s released back to pending", project_id)
        return bool(released)
