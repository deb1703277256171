"""
End-to-end lifecycle through the real client data layer.

The client talks to the API through the DRF test client; the completion
task is run by hand in place of the Celery worker once the poll has slept
long enough to cover the processing delay.
"""

import shutil
import tempfile
from io import BytesIO
from unittest.mock import patch
from urllib.parse import urlsplit

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from rest_framework.test import APIClient, APITestCase

from motion_client import (
    CreateProjectMutation,
    ProcessProjectMutation,
    ProjectAPIClient,
    ProjectAPIError,
    ProjectQuery,
)
from motion import IDENTITY_FRAME_PLACEHOLDER_URL
from projects.tasks import complete_project_task

MEDIA_ROOT = tempfile.mkdtemp()


class APIClientSession:
    """requests.Session look-alike backed by the DRF test client."""

    def __init__(self):
        self.client = APIClient()
        self.calls = []

    def get(self, url, timeout=None):
        path = urlsplit(url).path
        self.calls.append(("GET", path))
        return self.client.get(path)

    def post(self, url, json=None, files=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append(("POST", path))
        if files:
            field, (filename, fh, content_type) = next(iter(files.items()))
            upload = SimpleUploadedFile(filename, fh.read(), content_type=content_type)
            return self.client.post(path, {field: upload}, format="multipart")
        return self.client.post(path, json, format="json")

    def close(self):
        pass


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class ProjectLifecycleTests(APITestCase):

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        self.session = APIClientSession()
        self.client_api = ProjectAPIClient("http://testserver", session=self.session)
        self.notifications = []

    @patch("projects.jobs.complete_project_task")
    def test_upload_process_poll_until_completed(self, mock_task):
        video = BytesIO(b"fake mp4 bytes")
        project = CreateProjectMutation(self.client_api, notify=self.notifications.append).mutate(video, "sample.mp4")
        self.assertEqual(project.status, "pending")
        self.assertIsNone(project.identity_frame_url)
        self.assertIsNone(project.generated_video_url)

        slept = []

        def fake_sleep(seconds):
            slept.append(seconds)
            # the delayed task fires once 5s of polling have passed
            if sum(slept) >= 5 and len(slept) == 3:
                complete_project_task(project.id)

        query = ProjectQuery(self.client_api, project.id, sleep=fake_sleep)
        processing = ProcessProjectMutation(self.client_api, query, notify=self.notifications.append).mutate(project.id)
        self.assertEqual(processing.status, "processing")
        self.assertEqual(query.data.status, "processing")

        seen = []
        final = query.poll(on_update=lambda p: seen.append(p.status))

        self.assertEqual(final.status, "completed")
        self.assertEqual(final.generated_video_url, final.original_video_url)
        self.assertEqual(final.identity_frame_url, IDENTITY_FRAME_PLACEHOLDER_URL)
        self.assertEqual(seen, ["processing", "processing", "processing", "completed"])
        self.assertEqual(slept, [2.0, 2.0, 2.0])

        # no further automatic refetch once completed
        self.assertIsNone(query.refetch_interval())
        self.assertEqual(query.poll(), final)

        self.assertEqual(
            [n.title for n in self.notifications],
            ["Video Uploaded", "Processing Started"],
        )

    def test_upload_without_video_surfaces_server_message(self):
        # the upload arrives without its file part
        self.session.post = lambda url, **kw: self.session.client.post(urlsplit(url).path, {}, format="multipart")

        mutation = CreateProjectMutation(self.client_api, notify=self.notifications.append)
        with self.assertRaisesMessage(ProjectAPIError, "No video file provided"):
            mutation.mutate(BytesIO(b"video"), "sample.mp4")

        self.assertEqual(self.notifications[0].variant, "destructive")
        self.assertEqual(self.notifications[0].description, "No video file provided")

    def test_get_unknown_project(self):
        query = ProjectQuery(self.client_api, 4242)
        self.assertIsNone(query.poll())
        self.assertEqual(query.error.status_code, 404)
