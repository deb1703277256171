import logging
import uuid
from functools import partial

from django.db import transaction

from motion import MotionTransfer

from .models import Project
from .tasks import complete_project_task

logger = logging.getLogger(__name__)


class ProcessingTrigger:
    """Drives a project through processing.

    ``start`` moves a pending project to processing and schedules
    ``complete_project_task`` to run after ``delay_seconds``. The task id is
    kept on the record so ``cancel`` can revoke it.
    """

    def __init__(self, store, *, delay_seconds: float = 5, transfer: MotionTransfer | None = None):
        self.store = store
        self.delay_seconds = delay_seconds
        self.transfer = transfer or MotionTransfer()

    def start(self, project_id: int) -> Project:
        """Move a pending project to processing and schedule its completion.

        The task id is stored together with the status change, and the task is
        sent only once that write commits. If sending fails the project is
        released back to pending so it can be processed again.
        """
        task_id = uuid.uuid4().hex
        with transaction.atomic():
            # only a pending project can start; a second call raises InvalidTransition
            self.store.update(project_id, status=Project.Status.PROCESSING, completion_task_id=task_id)
            transaction.on_commit(partial(self._dispatch, project_id, task_id))
        return self.store.get(project_id)

    def _dispatch(self, project_id: int, task_id: str) -> None:
        try:
            complete_project_task.apply_async(args=[project_id], countdown=self.delay_seconds, task_id=task_id)
        except Exception:
            logger.exception("Could not schedule completion of project %s", project_id)
            self.store.release(project_id, task_id)
            raise
        logger.info(
            "Scheduled completion of project %s in %ss (task %s)",
            project_id, self.delay_seconds, task_id,
        )

    def complete(self, project_id: int) -> Project:
        project = self.store.get(project_id)
        if project.status != Project.Status.PROCESSING:
            logger.warning("Skipping completion of project %s: status is %s", project_id, project.status)
            return project

        try:
            outputs = self.transfer.run(project.original_video_url)
        except Exception as e:
            self.fail(project_id, str(e))
            raise

        return self.store.update(
            project_id,
            status=Project.Status.COMPLETED,
            identity_frame_url=outputs.identity_frame_url,
            generated_video_url=outputs.generated_video_url,
            completion_task_id="",
        )

    def fail(self, project_id: int, reason: str) -> Project:
        logger.error("Project %s failed: %s", project_id, reason)
        return self.store.update(
            project_id,
            status=Project.Status.FAILED,
            error=reason,
            completion_task_id="",
        )

    def cancel(self, project_id: int) -> bool:
        """Revoke the pending completion task, if any. The status is left as is."""
        project = self.store.get(project_id)
        if not project.completion_task_id:
            return False

        complete_project_task.AsyncResult(project.completion_task_id).revoke()
        self.store.update(project_id, completion_task_id="")
        logger.info("Revoked completion task %s for project %s", project.completion_task_id, project_id)
        return True
