import base64
import logging
import mimetypes
import os
import posixpath
import re
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

import httpx

from chatapi_whatsapp.clients.base import BaseClient
from chatapi_whatsapp.data_types import EncodedFile, Recipient
from chatapi_whatsapp.enums import Endpoints, RecipientTypes
from chatapi_whatsapp.exceptions import CommunicationError, FileNotProvided, ReceiverNotProvided
from chatapi_whatsapp.settings import settings

logger = logging.getLogger(__name__)

FileInput = Union[str, bytes, os.PathLike]

DEFAULT_MIMETYPE = "application/octet-stream"


def normalize_recipient(phone: Union[str, int, None]) -> Recipient:
    """
    Address a recipient either by chat id or by phone number.

    Chat ids (``17472822486@c.us``, ``...@g.us``) are kept verbatim, anything else is a phone
    number and is reduced to its digits.
    """
    if not phone:
        raise ReceiverNotProvided()
    phone = str(phone)
    if "@" in phone:
        return Recipient(RecipientTypes.CHAT_ID.value, phone)
    return Recipient(RecipientTypes.PHONE.value, re.sub(r"[^0-9]", "", phone))


def is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def encode_file(
    file: FileInput, filename: Optional[str] = None, mimetype: Optional[str] = None
) -> EncodedFile:
    """
    Turn a file argument into the ``body`` and ``filename`` of a sendFile payload.

    Args:
        file: A public URL, a path to a local file, or the raw file contents.
        filename (str): The file name shown to the user. Defaults to the URL or path basename.
        mimetype (str): The file mime type. Guessed from the file name for local files.

    Returns:
        EncodedFile: The URL as is, or the contents as a base64 data URI.
    """
    if not file:
        raise FileNotProvided()

    if isinstance(file, os.PathLike):
        file = os.fspath(file)

    if isinstance(file, str) and is_url(file):
        if filename is None:
            filename = posixpath.basename(urlparse(file).path)
        return EncodedFile(body=file, filename=filename)

    if isinstance(file, str) and os.path.isfile(file):
        if filename is None:
            filename = os.path.basename(file)
        if mimetype is None:
            mimetype = mimetypes.guess_type(file)[0]
        try:
            with open(file, "rb") as f:
                content = f.read()
        except OSError as e:
            logger.error("Could not read file %s: %s", file, e)
            raise CommunicationError(str(e)) from e
    elif isinstance(file, str):
        content = file.encode("utf-8")
    else:
        content = file

    encoded = base64.b64encode(content).decode("ascii")
    return EncodedFile(body=f"data:{mimetype or DEFAULT_MIMETYPE};base64,{encoded}", filename=filename)


class ChatAPIClient(BaseClient):
    """
    Client for interacting with a Chat API WhatsApp instance.

    Args:
        token (str): The token of the Chat API instance.
        base_url (str): The instance URL, e.g. ``https://eu1.chat-api.com/instance12345``.
        verify_ssl (bool): Whether to verify SSL certificates.
        timeout (int): The timeout for requests.
        transport (httpx.AsyncBaseTransport): Optional transport, mostly useful for tests.
    """

    def __init__(  # pylint: disable=R0913, R0917
        self,
        token: Optional[str] = settings.CHATAPI_TOKEN,
        base_url: Optional[str] = settings.CHATAPI_API_URL,
        verify_ssl: bool = settings.HTTPX_CLIENT_VERIFY_SSL,
        timeout: int = settings.HTTPX_CLIENT_DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, token, verify_ssl, timeout, transport)

    async def group(self, group_name: str, phones: List[str], message: str) -> Dict[str, Any]:
        """
        Create a group and send the message to it.

        The group is queued by the gateway and eventually created, even if the phone is offline.
        The response holds the ``chatId`` if the group was created within 20 seconds.

        Args:
            group_name (str): The group name.
            phones (List[str]): Phones starting with the country code, without your own number.
            message (str): The first message posted in the group.
        """
        if not phones:
            raise ReceiverNotProvided()
        payload = {
            "messageText": message,
            "phones": phones,
            "groupName": group_name,
        }
        return await self.post(Endpoints.GROUP.value, payload)

    async def send_message(self, phone: Union[str, int], message: str) -> Dict[str, Any]:
        """
        Send a text message to a phone number or an existing chat.

        Args:
            phone (str): A phone number starting with the country code, or a chat id.
            message (str): The message text.
        """
        recipient = normalize_recipient(phone)
        payload = {"body": message, recipient.key: recipient.value}
        logger.debug("Sending message to %s", recipient.value)
        return await self.post(Endpoints.SEND_MESSAGE.value, payload)

    async def send_file(
        self,
        phone: Union[str, int],
        file: FileInput,
        filename: Optional[str] = None,
        mimetype: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send a file to a new or existing chat.

        Args:
            phone (str): A phone number starting with the country code, or a chat id.
            file: A file URL, a local file path or the file contents.
            filename (str): The file name received by the user.
            mimetype (str): The file mime type.
        """
        recipient = normalize_recipient(phone)
        encoded = encode_file(file, filename, mimetype)
        payload = {
            "body": encoded.body,
            "filename": encoded.filename,
            recipient.key: recipient.value,
        }
        logger.debug("Sending file %s to %s", encoded.filename, recipient.value)
        return await self.post(Endpoints.SEND_FILE.value, payload)

    async def messages(
        self, last: Optional[int] = 100, last_message_number: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Get the messages list.

        Args:
            last (int): Return the last ``last`` messages. Ignored when not positive.
            last_message_number (int): The ``lastMessageNumber`` of a previous response, used
                when ``last`` is not positive.
        """
        params = {}
        if last and last > 0:
            params["last"] = last
        elif last_message_number is not None:
            params["lastMessageNumber"] = last_message_number
        return await self.get(Endpoints.MESSAGES.value, params=params)

    async def set_webhook(self, webhook_url: str, set: bool = True) -> Dict[str, Any]:  # pylint: disable=W0622
        """Set the URL receiving new message and delivery (ack) notifications."""
        payload = {"set": set, "webhookUrl": webhook_url}
        return await self.post(Endpoints.WEBHOOK.value, payload)

    async def get_webhook(self) -> Dict[str, Any]:
        """Return the current webhook URL."""
        return await self.get(Endpoints.WEBHOOK.value)

    async def ack_notifications(self, on: bool = True) -> Dict[str, Any]:
        """Turn ack (message delivered and viewed) notifications in webhooks on or off."""
        payload = {"ackNotificationsOn": 1 if on else 0}
        return await self.post(Endpoints.ACK_NOTIFICATIONS.value, payload)

    async def get_ack_notifications(self) -> Dict[str, Any]:
        return await self.get(Endpoints.ACK_NOTIFICATIONS.value)

    async def logout(self) -> Dict[str, Any]:
        """Logout from WhatsApp Web to get a new QR code."""
        return await self.get(Endpoints.LOGOUT.value)

    async def reboot(self) -> Dict[str, Any]:
        """Reboot the WhatsApp instance."""
        return await self.get(Endpoints.REBOOT.value)

    async def status(self) -> Dict[str, Any]:
        """Get the account status and the QR code for authorization."""
        return await self.get(Endpoints.STATUS.value)

    async def qr_code(self) -> bytes:
        """Get the QR code as an image, not base64."""
        response = await self._send("GET", Endpoints.QR_CODE.value)
        return response.content

    async def show_messages_queue(self) -> Dict[str, Any]:
        """Get the outbound messages queue."""
        return await self.get(Endpoints.SHOW_MESSAGES_QUEUE.value)

    async def clear_messages_queue(self) -> Dict[str, Any]:
        """Clear the outbound messages queue."""
        return await self.get(Endpoints.CLEAR_MESSAGES_QUEUE.value)


def create_client(config=None, **kwargs) -> ChatAPIClient:
    """Build a client from the given settings, or from the environment."""
    config = config or settings
    return ChatAPIClient(
        token=config.CHATAPI_TOKEN,
        base_url=config.CHATAPI_API_URL,
        verify_ssl=config.HTTPX_CLIENT_VERIFY_SSL,
        timeout=config.HTTPX_CLIENT_DEFAULT_TIMEOUT,
        **kwargs,
    )
