from enum import Enum


class Endpoints(str, Enum):
    """The gateway endpoints used by the client."""

    GROUP = "/group"
    SEND_MESSAGE = "/sendMessage"
    SEND_FILE = "/sendFile"
    MESSAGES = "/messages"
    WEBHOOK = "/webhook"
    ACK_NOTIFICATIONS = "/settings/ackNotificationsOn"
    LOGOUT = "/logout"
    REBOOT = "/reboot"
    STATUS = "/status"
    QR_CODE = "/qr_code"
    SHOW_MESSAGES_QUEUE = "/showMessagesQueue"
    CLEAR_MESSAGES_QUEUE = "/clearMessagesQueue"


class RecipientTypes(str, Enum):
    """The payload keys a recipient can be addressed with."""

    PHONE = "phone"
    CHAT_ID = "chatId"
