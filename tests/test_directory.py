import asyncio
from datetime import date

import httpx
import pytest
from pydantic import ValidationError

from common.notify import CollectingNotifier
from connectors.roadworks.directory import SAMPLE_PROJECTS, ProjectDirectory
from connectors.roadworks.mapping import map_project, unwrap_records


def _loaded(**kw) -> ProjectDirectory:
    d = ProjectDirectory(notifier=CollectingNotifier(), **kw)
    asyncio.run(d.load())
    return d


def test_sample_load():
    d = _loaded(use_sample=True)
    assert [p.name for p in d.projects] == ["Highway 401 Expansion", "Downtown Bridge Repair"]
    hwy = d.get("1")
    assert hwy.tender_date == date(2024, 1, 15)
    assert hwy.contract_amount == 25000000
    assert hwy.contractor_email == "contact@abcconstruction.com"
    assert d.get("nope") is None


def test_search_vancouver():
    d = _loaded(use_sample=True)
    hits = d.filter("vancouver")
    assert [p.location for p in hits] == ["Vancouver, BC"]


@pytest.mark.parametrize("query,ids", [
    ("HIGHWAY", ["1"]),
    ("xyz infra", ["2"]),
    ("c", ["1", "2"]),
    ("r", ["1", "2"]),
    ("nothing like it", []),
])
def test_filter_matches_name_location_contractor(query, ids):
    d = _loaded(use_sample=True)
    assert [p.id for p in d.filter(query)] == ids


@pytest.mark.parametrize("blank", [None, "", "   "])
def test_blank_query_returns_everything_in_order(blank):
    d = _loaded(use_sample=True)
    assert d.filter(blank) == d.projects


def test_filter_is_idempotent():
    d = _loaded(use_sample=True)
    once = d.filter("bridge")
    again = ProjectDirectory(notifier=CollectingNotifier())
    again._projects = once
    assert again.filter("bridge") == once


def test_empty_message():
    assert ProjectDirectory.empty_message("zzz") == "No projects found matching your search"
    assert ProjectDirectory.empty_message("") == "No projects available"


def test_remote_load_accepts_envelope():
    def handler(request):
        assert request.url.path == "/api/projects"
        return httpx.Response(200, json={"value": SAMPLE_PROJECTS[::-1]})

    d = _loaded(use_sample=False, transport=httpx.MockTransport(handler))
    assert [p.id for p in d.projects] == ["2", "1"]
    assert d.notifier.messages == []


@pytest.mark.parametrize("handler", [
    lambda request: httpx.Response(500, text="boom"),
    lambda request: httpx.Response(200, json={"unexpected": True}),
    lambda request: httpx.Response(200, json=[{"id": 1, "name": "no other fields"}]),
])
def test_remote_load_failure_leaves_directory_empty(handler):
    d = _loaded(use_sample=False, transport=httpx.MockTransport(handler))
    assert d.projects == []
    assert d.loaded
    assert d.notifier.messages == [("Error", "Failed to load projects")]


def test_map_project_normalises():
    raw = dict(SAMPLE_PROJECTS[0], id=7, description="  ")
    p = map_project(raw)
    assert p.id == "7"
    assert p.description is None


def test_map_project_rejects_negative_amount():
    with pytest.raises(ValidationError):
        map_project(dict(SAMPLE_PROJECTS[0], contractAmount=-1))


def test_projects_are_immutable():
    p = map_project(SAMPLE_PROJECTS[0])
    with pytest.raises(ValidationError):
        p.name = "renamed"


def test_unwrap_records():
    assert unwrap_records([{"id": "1"}]) == [{"id": "1"}]
    assert unwrap_records({"projects": []}) == []
    with pytest.raises(ValueError):
        unwrap_records("nope")
