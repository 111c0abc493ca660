from __future__ import annotations

from typing import Callable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from src.utils.logs import log_message


class Notification(BaseModel):
    """A toast shown to the operator."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class Notifier:
    """Collects notifications and forwards them to an optional sink.

    The command line passes no sink and relies on the log output; a UI
    layer would pass a callable that renders the toast.
    """

    def __init__(self, sink: Optional[Callable[[Notification], None]] = None) -> None:
        self._sink = sink
        self.history: List[Notification] = []

    def success(self, title: str, description: str) -> Notification:
        return self._emit(Notification(title=title, description=description))

    def error(self, title: str, description: str) -> Notification:
        return self._emit(Notification(title=title, description=description, variant="destructive"))

    def _emit(self, notification: Notification) -> Notification:
        self.history.append(notification)
        level = "ERROR" if notification.variant == "destructive" else "INFO"
        log_message(f"{notification.title}: {notification.description}", level=level)
        if self._sink is not None:
            self._sink(notification)
        return notification

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
