from unittest.mock import patch

from django.apps import apps
from django.conf import settings
from django.test import TestCase
from kombu.exceptions import OperationalError

from motion import IDENTITY_FRAME_PLACEHOLDER_URL, MotionTransfer
from projects.exceptions import InvalidTransition, ProjectNotFound
from projects.jobs import ProcessingTrigger
from projects.store import DatabaseProjectStore
from projects.tasks import complete_project_task


@patch("projects.jobs.complete_project_task")
class ProcessingTriggerTests(TestCase):

    def setUp(self):
        self.store = DatabaseProjectStore()
        self.trigger = ProcessingTrigger(self.store, delay_seconds=5)
        self.project = self.store.create("/uploads/sample.mp4")

    def start(self):
        with self.captureOnCommitCallbacks(execute=True):
            return self.trigger.start(self.project.id)

    def test_start_moves_to_processing_and_schedules_completion(self, mock_task):
        project = self.start()

        self.assertEqual(project.status, "processing")
        self.assertTrue(project.completion_task_id)
        mock_task.apply_async.assert_called_once_with(
            args=[self.project.id], countdown=5, task_id=project.completion_task_id,
        )

    def test_start_sends_task_only_after_commit(self, mock_task):
        with self.captureOnCommitCallbacks() as callbacks:
            project = self.trigger.start(self.project.id)

        self.assertEqual(project.status, "processing")
        mock_task.apply_async.assert_not_called()
        self.assertEqual(len(callbacks), 1)

    def test_start_unknown_project(self, mock_task):
        with self.assertRaises(ProjectNotFound):
            self.start()
        mock_task.apply_async.assert_not_called()

    def test_start_twice_schedules_once(self, mock_task):
        self.start()

        with self.assertRaises(InvalidTransition):
            self.start()
        mock_task.apply_async.assert_called_once()

    def test_failed_dispatch_releases_project(self, mock_task):
        mock_task.apply_async.side_effect = OperationalError("broker unreachable")

        with self.assertRaises(OperationalError):
            self.start()

        project = self.store.get(self.project.id)
        self.assertEqual(project.status, "pending")
        self.assertEqual(project.completion_task_id, "")

        mock_task.apply_async.side_effect = None
        self.assertEqual(self.start().status, "processing")

    def test_completion_before_start_returns_leaves_no_task_id(self, mock_task):
        # delay of 0 or an eager worker: the task finishes while it is being sent
        mock_task.apply_async.side_effect = lambda args, countdown, task_id: self.trigger.complete(args[0])

        self.start()

        project = self.store.get(self.project.id)
        self.assertEqual(project.status, "completed")
        self.assertEqual(project.completion_task_id, "")
        self.assertFalse(self.trigger.cancel(self.project.id))
        mock_task.AsyncResult.assert_not_called()

    def test_complete_fills_outputs(self, mock_task):
        self.start()

        project = self.trigger.complete(self.project.id)

        self.assertEqual(project.status, "completed")
        self.assertEqual(project.generated_video_url, "/uploads/sample.mp4")
        self.assertEqual(project.identity_frame_url, IDENTITY_FRAME_PLACEHOLDER_URL)
        self.assertEqual(project.completion_task_id, "")

    def test_complete_ignores_project_not_processing(self, mock_task):
        project = self.trigger.complete(self.project.id)

        self.assertEqual(project.status, "pending")
        self.assertIsNone(self.store.get(self.project.id).generated_video_url)

    def test_complete_marks_failed_when_transfer_raises(self, mock_task):
        transfer = MotionTransfer()
        self.trigger = ProcessingTrigger(self.store, delay_seconds=5, transfer=transfer)
        self.start()

        with patch.object(transfer, "run", side_effect=RuntimeError("model crashed")):
            with self.assertRaises(RuntimeError):
                self.trigger.complete(self.project.id)

        project = self.store.get(self.project.id)
        self.assertEqual(project.status, "failed")
        self.assertEqual(project.error, "model crashed")
        self.assertIsNone(project.generated_video_url)

    def test_cancel_revokes_scheduled_task(self, mock_task):
        task_id = self.start().completion_task_id

        self.assertTrue(self.trigger.cancel(self.project.id))

        mock_task.AsyncResult.assert_called_once_with(task_id)
        mock_task.AsyncResult.return_value.revoke.assert_called_once_with()
        project = self.store.get(self.project.id)
        self.assertEqual(project.completion_task_id, "")
        self.assertEqual(project.status, "processing")

    def test_cancel_without_task(self, mock_task):
        self.assertFalse(self.trigger.cancel(self.project.id))
        mock_task.AsyncResult.assert_not_called()


class CompleteProjectTaskTests(TestCase):

    def setUp(self):
        self.store = apps.get_app_config("projects").store
        self.project = self.store.create("/uploads/sample.mp4")

    def test_task_completes_processing_project(self):
        self.store.update(self.project.id, status="processing")

        result = complete_project_task(self.project.id)

        self.assertEqual(result, "completed")
        project = self.store.get(self.project.id)
        self.assertEqual(project.generated_video_url, project.original_video_url)
        self.assertEqual(project.identity_frame_url, IDENTITY_FRAME_PLACEHOLDER_URL)

    def test_service_placeholder_defaults_to_motion_constant(self):
        self.assertEqual(settings.IDENTITY_FRAME_PLACEHOLDER_URL, IDENTITY_FRAME_PLACEHOLDER_URL)
        self.assertEqual(apps.get_app_config("projects").trigger.transfer.identity_frame_url, IDENTITY_FRAME_PLACEHOLDER_URL)

    def test_task_unknown_project(self):
        self.assertEqual(complete_project_task(999), "Project 999 not found")

    def test_task_after_completion_is_noop(self):
        self.store.update(self.project.id, status="processing")
        complete_project_task(self.project.id)

        self.assertEqual(complete_project_task(self.project.id), "completed")
        self.assertEqual(self.store.get(self.project.id).status, "completed")
