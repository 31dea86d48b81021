# connectors/roadworks/directory.py
from __future__ import annotations
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from common.errors import LoadError
from common.models import Project
from common.notify import LogNotifier, Notifier
from common.settings import settings
from connectors.roadworks.client import roads_get_json
from connectors.roadworks.mapping import map_project, unwrap_records

log = logging.getLogger(__name__)

# Placeholder set served until the listing endpoint goes live (USE_SAMPLE_PROJECTS).
SAMPLE_PROJECTS: List[dict] = [
    {
        "id": "1",
        "name": "Highway 401 Expansion",
        "location": "Toronto, ON",
        "contractor": "ABC Construction Ltd.",
        "contractAmount": 25000000,
        "tenderDate": "2024-01-15",
        "contractorEmail": "contact@abcconstruction.com",
        "description": "Expansion of Highway 401 from 4 to 6 lanes",
        "status": "In Progress",
    },
    {
        "id": "2",
        "name": "Downtown Bridge Repair",
        "location": "Vancouver, BC",
        "contractor": "XYZ Infrastructure Inc.",
        "contractAmount": 15000000,
        "tenderDate": "2024-02-20",
        "contractorEmail": "projects@xyzinfra.com",
        "description": "Structural repair and maintenance of downtown bridge",
        "status": "Completed",
    },
]


class ProjectDirectory:
    """
    In-memory project list. Loaded once, never mutated afterwards; search is
    a plain pass over the list in load order.
    """

    def __init__(self,
                 notifier: Optional[Notifier] = None,
                 use_sample: Optional[bool] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.notifier = notifier or LogNotifier()
        self.use_sample = settings.use_sample_projects if use_sample is None else use_sample
        self.transport = transport
        self._projects: List[Project] = []
        self.loaded = False

    @property
    def projects(self) -> List[Project]:
        return list(self._projects)

    async def load(self) -> List[Project]:
        """Fetch the project set. On any failure: notify, stay empty, don't raise."""
        try:
            self._projects = await self._fetch()
        except LoadError as e:
            log.error("project load failed: %s", e)
            self._projects = []
            self.notifier.notify("Error", "Failed to load projects")
        self.loaded = True
        log.info("project directory holds %d project(s)", len(self._projects))
        return self.projects

    async def _fetch(self) -> List[Project]:
        try:
            if self.use_sample:
                records = SAMPLE_PROJECTS
            else:
                payload = await roads_get_json(settings.projects_path,
                                               timeout=settings.load_timeout_seconds,
                                               transport=self.transport)
                records = unwrap_records(payload)
            return [map_project(r) for r in records]
        except (httpx.HTTPError, ValidationError, ValueError, TypeError) as e:
            raise LoadError(str(e)) from e

    def filter(self, query: str | None) -> List[Project]:
        if not (query or "").strip():
            return self.projects
        q = query.lower()
        return [
            p for p in self._projects
            if q in p.name.lower()
            or q in p.location.lower()
            or q in p.contractor.lower()
        ]

    def get(self, project_id: str) -> Optional[Project]:
        for p in self._projects:
            if p.id == project_id:
                return p
        return None

    @staticmethod
    def empty_message(query: str | None) -> str:
        if query:
            return "No projects found matching your search"
        return "No projects available"
