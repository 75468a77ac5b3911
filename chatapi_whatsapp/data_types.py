from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chatapi_whatsapp.models import ChatAPIMessage


@dataclass(frozen=True, slots=True)
class Recipient:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class EncodedFile:
    body: str
    filename: Optional[str]


@runtime_checkable
class Notifiable(Protocol):
    """Anything a notification can be routed to."""

    def route_notification_for(self, channel: str) -> Any:
        ...


@runtime_checkable
class Notification(Protocol):
    """A notification that knows how to render itself for the Chat API channel."""

    def to_chatapi(self, notifiable: Notifiable) -> "ChatAPIMessage":
        ...
