# common/notify.py
from __future__ import annotations
import logging
from typing import List, Protocol, Tuple

log = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, title: str, message: str) -> None: ...


class LogNotifier:
    """Default sink: one-time user notifications end up in the log."""

    def notify(self, title: str, message: str) -> None:
        log.info("[notify] %s: %s", title, message)


class CollectingNotifier:
    """Keeps notifications so a caller (e.g. the gateway) can return them."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        log.debug("[notify] %s: %s", title, message)
        self.messages.append((title, message))

    def as_dicts(self) -> list[dict]:
        return [{"title": t, "message": m} for t, m in self.messages]

    def drain(self) -> list[dict]:
        """Hand out pending notifications once; later calls only see new ones."""
        out = self.as_dicts()
        self.messages.clear()
        return out
