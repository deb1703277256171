import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ProjectNotFound(Exception):
    def __init__(self, project_id):
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found")


class InvalidTransition(Exception):
    def __init__(self, project_id, current, requested):
        self.project_id = project_id
        self.current = current
        self.requested = requested
        super().__init__(f"Project {project_id} is {current}, cannot move to {requested}")


def api_exception_handler(exc, context):
    """Render every API error as ``{"message": ...}``."""
    if isinstance(exc, ProjectNotFound):
        return Response({"message": "Project not found"}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, InvalidTransition):
        return Response({"message": str(exc)}, status=status.HTTP_409_CONFLICT)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.error("Unhandled error in %s", type(view).__name__, exc_info=exc)
        return Response(
            {"message": "Internal Server Error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = response.data.get("detail") if isinstance(response.data, dict) else None
    response.data = {"message": str(detail) if detail is not None else "Request failed"}
    return response
