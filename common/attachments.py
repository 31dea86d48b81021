# common/attachments.py
from __future__ import annotations
import logging
import time
from typing import Callable, List, Optional, Tuple

from common.errors import MediaSelectionError
from common.models import Attachment
from common.notify import LogNotifier, Notifier
from common.picker import CaptureSource, MediaPicker, PickedAsset, PickerResponse, options_for
from common.validators import check_media

log = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class AttachmentManager:
    """
    Ordered list of media picked for one complaint form.

    Every item passed check_media() when it was added. Nothing is evicted
    and nothing is de-duplicated: picking the same file twice gives two
    entries.
    """

    def __init__(self,
                 notifier: Optional[Notifier] = None,
                 stop_on_rejection: bool = False,
                 clock_ms: Callable[[], int] = _now_ms):
        self._items: List[Attachment] = []
        self.rejections: List[MediaSelectionError] = []
        self.notifier = notifier or LogNotifier()
        self.stop_on_rejection = stop_on_rejection
        self._clock_ms = clock_ms

    @property
    def items(self) -> Tuple[Attachment, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    async def request_capture(self, picker: MediaPicker,
                              source: Optional[CaptureSource]) -> List[Attachment]:
        """Launch the picker for the chosen source. source=None is the Cancel choice."""
        if source is None:
            return []
        response = await picker.launch(source, options_for(source))
        return self.on_media_selected(response)

    def on_media_selected(self, response: PickerResponse) -> List[Attachment]:
        if response.did_cancel:
            return []

        if response.error_code:
            err = MediaSelectionError("Error", f"Failed to select media: {response.error_message}")
            log.warning("media picker error code=%s: %s", response.error_code, err)
            self._reject(err)
            return []

        accepted: List[Attachment] = []
        for asset in response.assets:
            rejection = check_media(asset.type, asset.file_size)
            if rejection:
                log.info("rejected %s (%s, %s bytes): %s", asset.file_name or asset.uri,
                         asset.type, asset.file_size, rejection.title)
                self._reject(rejection)
                if self.stop_on_rejection:
                    break
                continue
            accepted.append(self._to_attachment(asset))

        self._items.extend(accepted)
        return accepted

    def precheck_upload(self, file_name: Optional[str], media_type: Optional[str],
                        byte_size: Optional[int]) -> bool:
        """Kind/size check on what an upload declares, before its bytes are read."""
        rejection = check_media(media_type, byte_size)
        if rejection:
            log.info("rejected upload %s (%s, %s bytes): %s", file_name, media_type, byte_size, rejection.title)
            self._reject(rejection)
            return False
        return True

    def add_upload(self, file_name: Optional[str], media_type: Optional[str],
                   content: bytes) -> Optional[Attachment]:
        """Same checks as the picker path, for bytes that arrived over HTTP."""
        asset = PickedAsset(uri=f"upload:{file_name or ''}", type=media_type,
                            file_name=file_name, file_size=len(content))
        rejection = check_media(asset.type, asset.file_size)
        if rejection:
            self._reject(rejection)
            return None
        att = self._to_attachment(asset).model_copy(update={"content": content})
        self._items.append(att)
        return att

    def remove(self, index: int) -> None:
        if 0 <= index < len(self._items):
            del self._items[index]

    def _reject(self, err: MediaSelectionError) -> None:
        self.rejections.append(err)
        self.notifier.notify(err.title, err.message)

    def _to_attachment(self, asset: PickedAsset) -> Attachment:
        return Attachment(
            uri=asset.uri,
            type=asset.type,
            file_name=asset.file_name or f"attachment-{self._clock_ms()}",
            file_size=asset.file_size or 0,
        )
