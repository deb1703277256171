from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .api import ProjectAPIClient, ProjectAPIError
from .schemas import Project

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 2.0


class ProjectQuery:
    """Cached view of the active project, refreshed by polling.

    The query is disabled while ``project_id`` is None. After each fetch it
    asks to be refetched every ``interval`` seconds for as long as the
    last-known status is pending or processing.
    """

    def __init__(
        self,
        client: ProjectAPIClient,
        project_id: Optional[int] = None,
        *,
        interval: float = POLL_INTERVAL_SECONDS,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.client = client
        self.interval = interval
        self._sleep = sleep or time.sleep
        self.project_id = project_id
        self.data: Optional[Project] = None
        self.error: Optional[ProjectAPIError] = None
        self.fetch_count = 0

    @property
    def enabled(self) -> bool:
        return self.project_id is not None

    def set_project_id(self, project_id: Optional[int]) -> None:
        if project_id != self.project_id:
            self.project_id = project_id
            self.data = None
            self.error = None

    def refetch_interval(self) -> Optional[float]:
        if not self.enabled or self.data is None:
            return None
        return self.interval if self.data.is_active else None

    def fetch(self) -> Optional[Project]:
        if not self.enabled:
            return None
        self.fetch_count += 1
        try:
            project = self.client.get_project(self.project_id)
        except ProjectAPIError as e:
            logger.warning("Fetching project %s failed: %s", self.project_id, e)
            self.error = e
            return None
        self.data = project
        self.error = None
        return project

    def invalidate(self) -> Optional[Project]:
        """Refetch right away. The cached snapshot stays until the new one arrives."""
        return self.fetch()

    def poll(self, on_update: Optional[Callable[[Project], None]] = None) -> Optional[Project]:
        """Fetch, then keep refetching until the project reaches a terminal status.

        ``on_update`` is called with every fetched snapshot. Polling also stops
        when the id is cleared or a fetch fails before any data arrived.
        """
        while self.enabled:
            project = self.fetch()
            if project is not None and on_update is not None:
                on_update(project)
            interval = self.refetch_interval()
            if interval is None:
                break
            self._sleep(interval)
        return self.data
