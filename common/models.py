from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Literal, Union
from datetime import date

MediaType = Literal["image/jpeg", "image/png", "image/jpg", "video/mp4", "video/quicktime"]

class Project(BaseModel):
    # records arrive camelCase from the API; python code uses snake_case
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    location: str
    contractor: str
    contractor_email: Optional[str] = Field(default=None, alias="contractorEmail")
    contract_amount: float = Field(ge=0, alias="contractAmount")
    tender_date: date = Field(alias="tenderDate")
    status: str
    description: Optional[str] = None

class ComplaintForm(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    description: str = ""
    contact_email: str = ""
    consent_given: bool = False

class Attachment(BaseModel):
    uri: str
    type: MediaType
    file_name: str
    file_size: int = 0
    # uploads carry their bytes; everything else is read from `uri` at send time
    content: Optional[bytes] = Field(default=None, repr=False, exclude=True)

class SubmissionSuccess(BaseModel):
    ok: Literal[True] = True
    status_code: int

class SubmissionFailure(BaseModel):
    ok: Literal[False] = False
    reason: str
    errors: Dict[str, str] = {}
    status_code: Optional[int] = None

SubmissionOutcome = Union[SubmissionSuccess, SubmissionFailure]

# ---------- route params ----------

class ProjectDetailParams(BaseModel):
    project: Project

class ComplaintFormParams(BaseModel):
    project_id: str = Field(min_length=1)
