import os
import uuid

from django.core.files.storage import default_storage
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .exceptions import ProjectNotFound
from .serializers import ProjectSerializer, ProjectUploadSerializer


def _first_error(errors):
    for messages in errors.values():
        if messages:
            return str(messages[0])
    return "invalid upload"


class ProjectViewSet(viewsets.ViewSet):
    # injected through as_view() in config/urls.py
    store = None
    trigger = None

    def _project_id(self, pk):
        try:
            return int(pk)
        except (TypeError, ValueError):
            raise ProjectNotFound(pk)

    def create(self, request, *args, **kwargs):
        if not request.FILES.get("video"):
            return Response({"message": "No video file provided"}, status=status.HTTP_400_BAD_REQUEST)

        upload = ProjectUploadSerializer(data=request.data)
        if not upload.is_valid():
            return Response({"message": _first_error(upload.errors)}, status=status.HTTP_400_BAD_REQUEST)

        video = upload.validated_data["video"]
        ext = os.path.splitext(video.name)[1].lower()
        name = default_storage.save(f"{uuid.uuid4().hex}{ext}", video)

        try:
            project = self.store.create(original_video_url=default_storage.url(name))
        except Exception:
            default_storage.delete(name)
            raise
        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        project = self.store.get(self._project_id(pk))
        return Response(ProjectSerializer(project).data)

    @action(detail=True, methods=["post"])
    def process(self, request, pk=None):
        project_id = self._project_id(pk)
        self.store.get(project_id)

        # returns while the project is still processing; completion happens in the background
        project = self.trigger.start(project_id)
        return Response(ProjectSerializer(project).data)
