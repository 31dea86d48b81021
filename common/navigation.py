# common/navigation.py
from __future__ import annotations
from enum import Enum
from typing import List, Optional, Tuple, Union

from common.models import ComplaintFormParams, ProjectDetailParams


class Route(str, Enum):
    PROJECT_LIST = "ProjectList"
    PROJECT_DETAILS = "ProjectDetails"
    COMPLAINT_FORM = "ComplaintForm"


TITLES = {
    Route.PROJECT_LIST: "Road Projects",
    Route.PROJECT_DETAILS: "Project Details",
    Route.COMPLAINT_FORM: "Submit Complaint",
}

RouteParams = Union[None, ProjectDetailParams, ComplaintFormParams]

_PARAM_TYPES = {
    Route.PROJECT_LIST: type(None),
    Route.PROJECT_DETAILS: ProjectDetailParams,
    Route.COMPLAINT_FORM: ComplaintFormParams,
}


class Navigator:
    """Back stack of (route, params). The project list is always at the bottom."""

    def __init__(self) -> None:
        self._stack: List[Tuple[Route, RouteParams]] = [(Route.PROJECT_LIST, None)]

    @property
    def current(self) -> Tuple[Route, RouteParams]:
        return self._stack[-1]

    @property
    def title(self) -> str:
        return TITLES[self.current[0]]

    def navigate(self, route: Route, params: RouteParams = None) -> None:
        expected = _PARAM_TYPES[route]
        if not isinstance(params, expected):
            raise TypeError(f"{route.value} expects {expected.__name__}, got {type(params).__name__}")
        self._stack.append((route, params))

    def go_back(self) -> Optional[Tuple[Route, RouteParams]]:
        if len(self._stack) > 1:
            self._stack.pop()
            return self.current
        return None

    def depth(self) -> int:
        return len(self._stack)
