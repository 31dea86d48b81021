# common/picker.py
from __future__ import annotations
import mimetypes
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple

from pydantic import BaseModel


class CaptureSource(str, Enum):
    CAMERA = "camera"
    LIBRARY = "library"


class PickerOptions(BaseModel):
    media_type: str = "mixed"
    video_quality: str = "high"
    max_width: int = 1024
    max_height: int = 1024
    selection_limit: int = 1


class PickedAsset(BaseModel):
    uri: str
    type: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None


class PickerResponse(BaseModel):
    did_cancel: bool = False
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    assets: List[PickedAsset] = []


CAMERA_OPTIONS = PickerOptions()
LIBRARY_OPTIONS = PickerOptions(selection_limit=5)

# label -> source; None means "Cancel"
CAPTURE_CHOICES: List[Tuple[str, Optional[CaptureSource]]] = [
    ("Take Photo", CaptureSource.CAMERA),
    ("Choose from Library", CaptureSource.LIBRARY),
    ("Cancel", None),
]


def options_for(source: CaptureSource) -> PickerOptions:
    return CAMERA_OPTIONS if source is CaptureSource.CAMERA else LIBRARY_OPTIONS


class MediaPicker(Protocol):
    """Camera / media library. Each launch resolves to exactly one response."""

    async def launch(self, source: CaptureSource, options: PickerOptions) -> PickerResponse: ...


class LocalFilePicker:
    """
    Picker over files already on disk (CLI runs, tests). The "selection" is
    the list of paths handed in; an empty selection behaves like the user
    backing out of the picker.
    """

    def __init__(self, paths: Sequence[str | Path]):
        self.paths = [Path(p) for p in paths]

    async def launch(self, source: CaptureSource, options: PickerOptions) -> PickerResponse:
        if not self.paths:
            return PickerResponse(did_cancel=True)

        limit = 1 if source is CaptureSource.CAMERA else max(1, options.selection_limit)
        assets: List[PickedAsset] = []
        for p in self.paths[:limit]:
            try:
                size = p.stat().st_size
            except OSError as e:
                return PickerResponse(error_code="others", error_message=str(e))
            mime, _ = mimetypes.guess_type(p.name)
            assets.append(PickedAsset(uri=str(p), type=mime, file_name=p.name, file_size=size))
        return PickerResponse(assets=assets)
