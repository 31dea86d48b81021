# connectors/roadworks/session.py
from __future__ import annotations
import logging
from typing import Dict, Optional

import httpx

from common.attachments import AttachmentManager
from common.models import ComplaintForm, SubmissionFailure, SubmissionOutcome
from common.navigation import Navigator
from common.notify import LogNotifier, Notifier
from common.settings import settings
from common.validators import validate_complaint
from connectors.roadworks.submit import INVALID_MESSAGE, submit_complaint

log = logging.getLogger(__name__)


class ComplaintSession:
    """
    State behind one open complaint form: the fields, the picked media, the
    last validation result and the busy flag. Lives as long as the form view.
    """

    def __init__(self,
                 project_id: str,
                 notifier: Optional[Notifier] = None,
                 navigator: Optional[Navigator] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.project_id = project_id
        self.notifier = notifier or LogNotifier()
        self.navigator = navigator
        self.transport = transport
        self.form = ComplaintForm()
        self.attachments = AttachmentManager(notifier=self.notifier,
                                             stop_on_rejection=settings.attachment_stop_on_rejection)
        self.errors: Dict[str, str] = {}
        self.busy = False

    def validate(self) -> bool:
        self.errors = validate_complaint(self.form)
        return not self.errors

    def _set_busy(self, value: bool) -> None:
        self.busy = value

    async def submit(self) -> Optional[SubmissionOutcome]:
        """
        Returns None when a submission is already in flight (the submit
        control is disabled while busy).
        """
        if self.busy:
            log.debug("submit ignored, already busy project=%s", self.project_id)
            return None
        if not self.validate():
            return SubmissionFailure(reason=INVALID_MESSAGE, errors=self.errors)

        outcome = await submit_complaint(self.project_id, self.form, self.attachments.items,
                                         on_busy=self._set_busy, transport=self.transport)
        if outcome.ok:
            self.notifier.notify("Success", "Your complaint has been submitted successfully.")
            if self.navigator:
                self.navigator.go_back()
        else:
            # fields and attachments stay as they are so the user can retry
            self.notifier.notify("Submission Failed", outcome.reason)
        return outcome
