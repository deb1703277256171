# HTTP client for the projects API.
#
# ENDPOINTS:
# - POST /api/projects                (multipart field "video")
# - GET  /api/projects/{id}
# - POST /api/projects/{id}/process   (empty JSON body)
#
# Every response body is validated before it is returned; a body that does not
# match the expected shape is reported as ProjectAPIError, same as a bad status.

from __future__ import annotations

import logging
import mimetypes
import os
from typing import Any, BinaryIO, Optional, Type, TypeVar, Union

import requests
from pydantic import BaseModel, ValidationError

from .schemas import ErrorMessage, Project

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ProjectAPIError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProjectAPIClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        session: Optional[Any] = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self._base_url = str(base_url).rstrip("/")
        self._timeout = float(timeout_seconds)
        self._session = session if session is not None else requests.Session()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "ProjectAPIClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --------------------------------------------------
    # Endpoints
    # --------------------------------------------------

    def project_url(self, project_id: Optional[int] = None) -> str:
        if project_id is None:
            return f"{self._base_url}/api/projects"
        return f"{self._base_url}/api/projects/{int(project_id)}"

    def get_project(self, project_id: int) -> Project:
        resp = self._request("get", self.project_url(project_id))
        if not _is_success(resp):
            raise ProjectAPIError("Failed to fetch project", resp.status_code)
        return _parse(Project, resp)

    def create_project(self, video: Union[str, os.PathLike, BinaryIO], filename: Optional[str] = None) -> Project:
        if isinstance(video, (str, os.PathLike)):
            try:
                fh = open(video, "rb")
            except OSError as e:
                raise ProjectAPIError(f"Cannot read {video}: {e.strerror}") from e
            with fh:
                return self._upload(fh, filename or os.path.basename(video))
        return self._upload(video, filename or os.path.basename(getattr(video, "name", "video.mp4")))

    def process_project(self, project_id: int) -> Project:
        resp = self._request("post", f"{self.project_url(project_id)}/process", json={})
        if not _is_success(resp):
            raise ProjectAPIError(_error_message(resp, "Failed to start processing"), resp.status_code)
        return _parse(Project, resp)

    # --------------------------------------------------
    # Internals
    # --------------------------------------------------

    def _upload(self, fh: BinaryIO, filename: str) -> Project:
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        resp = self._request("post", self.project_url(), files={"video": (filename, fh, content_type)})
        if not _is_success(resp):
            if resp.status_code == 400:
                raise ProjectAPIError(_parse(ErrorMessage, resp).message, 400)
            raise ProjectAPIError("Failed to create project", resp.status_code)
        return _parse(Project, resp)

    def _request(self, method: str, url: str, **kwargs):
        logger.debug("%s %s", method.upper(), url)
        try:
            return getattr(self._session, method)(url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise ProjectAPIError(f"Request to {url} failed: {e}") from e


def _is_success(resp) -> bool:
    return 200 <= resp.status_code < 300


def _parse(model: Type[M], resp) -> M:
    try:
        return model.model_validate(resp.json())
    except (ValueError, ValidationError) as e:
        logger.warning("Unexpected response body from server (%s): %s", resp.status_code, e)
        raise ProjectAPIError("Unexpected response from server", resp.status_code) from e


def _error_message(resp, fallback: str) -> str:
    try:
        return ErrorMessage.model_validate(resp.json()).message
    except (ValueError, ValidationError):
        return fallback
