from __future__ import annotations
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence

import httpx

from common.errors import ComplaintValidationError, SubmissionError
from common.models import (Attachment, ComplaintForm, SubmissionFailure,
                           SubmissionOutcome, SubmissionSuccess)
from common.settings import settings
from common.validators import ensure_valid
from connectors.roadworks.client import MultipartParts, roads_post_multipart

log = logging.getLogger(__name__)

SUCCESS_STATUSES = (200, 201)
FAILURE_MESSAGE = "Unable to submit your complaint. Please try again later."
INVALID_MESSAGE = "Please correct the highlighted fields"

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

def iso_timestamp(dt: datetime) -> str:
    # 2024-01-15T09:30:00.000Z
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def _attachment_bytes(att: Attachment) -> bytes:
    if att.content is not None:
        return att.content
    try:
        return Path(att.uri).read_bytes()
    except OSError as e:
        raise SubmissionError(f"cannot read attachment {att.file_name}: {e}") from e

def build_complaint_parts(project_id: str,
                          form: ComplaintForm,
                          attachments: Sequence[Attachment],
                          submitted_at: datetime) -> MultipartParts:
    """
    Multipart body for POST /complaints:
      projectId, description, contactEmail, consentGiven ("true"/"false"),
      submissionDate (ISO-8601, UTC), then one "attachments" file part per item.
    Text fields go in as parts too, so the body is multipart even with no files.
    """
    def text(name: str, value: str):
        return (name, (None, value.encode("utf-8"), None))

    parts: MultipartParts = [
        text("projectId", project_id),
        text("description", form.description),
        text("contactEmail", form.contact_email or ""),
        text("consentGiven", "true" if form.consent_given else "false"),
        text("submissionDate", iso_timestamp(submitted_at)),
    ]
    for att in attachments:
        parts.append(("attachments", (att.file_name, _attachment_bytes(att), att.type)))
    return parts

async def submit_complaint(project_id: str,
                           form: ComplaintForm,
                           attachments: Sequence[Attachment],
                           on_busy: Optional[Callable[[bool], None]] = None,
                           clock: Callable[[], datetime] = _utc_now,
                           transport: Optional[httpx.AsyncBaseTransport] = None) -> SubmissionOutcome:
    """
    Validate, then send exactly one POST. Invalid forms never touch the
    network and never enter the busy state.
    """
    # 1) validate
    try:
        ensure_valid(form)
    except ComplaintValidationError as e:
        return SubmissionFailure(reason=INVALID_MESSAGE, errors=e.errors)

    # 2) assemble; attachment reads happen here, before anything goes busy
    try:
        parts = build_complaint_parts(project_id, form, attachments, clock())
    except SubmissionError as e:
        log.error("complaint submission failed project=%s: %s", project_id, e)
        return SubmissionFailure(reason=FAILURE_MESSAGE)

    # 3) busy for the lifetime of the request only
    if on_busy:
        on_busy(True)
    try:
        # 4) deliver
        log.info("submitting complaint project=%s attachments=%d", project_id, len(attachments))
        r = await roads_post_multipart(settings.complaints_path, parts,
                                       timeout=settings.submit_timeout_seconds,
                                       transport=transport)
        if r.status_code not in SUCCESS_STATUSES:
            raise SubmissionError(f"{r.status_code} {r.reason_phrase} - {r.text}",
                                  status_code=r.status_code)
    except httpx.HTTPError as e:
        log.error("complaint submission failed project=%s: %r", project_id, e)
        return SubmissionFailure(reason=FAILURE_MESSAGE)
    except SubmissionError as e:
        log.error("complaint submission failed project=%s: %s", project_id, e)
        return SubmissionFailure(reason=FAILURE_MESSAGE, status_code=e.status_code)
    finally:
        if on_busy:
            on_busy(False)

    log.info("complaint accepted project=%s status=%s", project_id, r.status_code)
    return SubmissionSuccess(status_code=r.status_code)
