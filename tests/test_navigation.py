from datetime import date

import pytest

from common.formatting import format_currency, format_date, mailto
from common.models import ComplaintFormParams, ProjectDetailParams
from common.navigation import Navigator, Route
from connectors.roadworks.directory import SAMPLE_PROJECTS
from connectors.roadworks.mapping import map_project


def test_list_detail_form_and_back():
    nav = Navigator()
    assert nav.title == "Road Projects"

    project = map_project(SAMPLE_PROJECTS[1])
    nav.navigate(Route.PROJECT_DETAILS, ProjectDetailParams(project=project))
    assert nav.title == "Project Details"
    nav.navigate(Route.COMPLAINT_FORM, ComplaintFormParams(project_id=project.id))
    assert nav.current == (Route.COMPLAINT_FORM, ComplaintFormParams(project_id="2"))

    nav.go_back()
    assert nav.current[0] is Route.PROJECT_DETAILS
    nav.go_back()
    assert nav.go_back() is None
    assert nav.depth() == 1


def test_route_params_are_typed():
    nav = Navigator()
    with pytest.raises(TypeError):
        nav.navigate(Route.COMPLAINT_FORM, {"projectId": "1"})
    with pytest.raises(TypeError):
        nav.navigate(Route.PROJECT_DETAILS, ComplaintFormParams(project_id="1"))


def test_formatting():
    assert format_currency(25000000) == "$25,000,000.00"
    assert format_currency(1234.565) == "$1,234.57"
    assert format_date(date(2024, 2, 20)) == "2024-02-20"
    assert mailto("projects@xyzinfra.com") == "mailto:projects@xyzinfra.com"
    assert mailto(None) is None


def test_collecting_notifier_drain():
    from common.notify import CollectingNotifier

    notes = CollectingNotifier()
    notes.notify("Error", "Failed to load projects")
    assert notes.drain() == [{"title": "Error", "message": "Failed to load projects"}]
    assert notes.drain() == []
