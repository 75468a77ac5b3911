from chatapi_whatsapp.__version__ import __version__
from chatapi_whatsapp.channel import ChatAPIChannel
from chatapi_whatsapp.clients.chatapi import ChatAPIClient, create_client
from chatapi_whatsapp.exceptions import (
    CommunicationError,
    CouldNotSendNotification,
    FileNotProvided,
    InvalidRequest,
    ReceiverNotProvided,
    ServiceError,
)
from chatapi_whatsapp.models import ChatAPIMessage, FileAttachment

__all__ = [
    "__version__",
    "ChatAPIChannel",
    "ChatAPIClient",
    "ChatAPIMessage",
    "CommunicationError",
    "CouldNotSendNotification",
    "FileAttachment",
    "FileNotProvided",
    "InvalidRequest",
    "ReceiverNotProvided",
    "ServiceError",
    "create_client",
]
