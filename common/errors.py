# common/errors.py
from __future__ import annotations
from typing import Dict, Optional


class RoadsHubError(Exception):
    """Base for everything the hub reports back to the user."""


class ComplaintValidationError(RoadsHubError):
    """Field-level problems with a complaint form. Never leaves the device."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(", ".join(f"{k}: {v}" for k, v in self.errors.items()))


class MediaSelectionError(RoadsHubError):
    """Picker failure or a picked file outside the allowed kinds/sizes."""

    def __init__(self, title: str, message: str):
        self.title = title
        self.message = message
        super().__init__(f"{title}: {message}")


class LoadError(RoadsHubError):
    pass


class SubmissionError(RoadsHubError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
