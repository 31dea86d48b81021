from common.models import Project
from typing import Any, List

def map_project(raw: dict) -> Project:
    """
    API record -> Project. Accepts the camelCase wire shape
    ({id, name, location, contractor, contractAmount, tenderDate,
    contractorEmail, description?, status}); ids are normalised to str.
    Raises pydantic.ValidationError on a malformed record.
    """
    data = dict(raw)
    if data.get("id") is not None:
        data["id"] = str(data["id"])
    # blank description is the same as none
    if not (data.get("description") or "").strip():
        data["description"] = None
    return Project.model_validate(data)

def unwrap_records(payload: Any) -> List[dict]:
    """The listing may come back bare or wrapped in {"value": [...]} / {"projects": [...]}."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("value", "projects"):
            if isinstance(payload.get(key), list):
                return payload[key]
    raise ValueError(f"unexpected project listing shape: {type(payload).__name__}")
