import logging
from typing import Any, Dict, List, Optional

from chatapi_whatsapp.clients.chatapi import ChatAPIClient, create_client
from chatapi_whatsapp.data_types import Notifiable, Notification
from chatapi_whatsapp.settings import settings

logger = logging.getLogger(__name__)


class ChatAPIChannel:
    """
    Notification channel delivering messages through the Chat API gateway.

    A notification takes part by implementing ``to_chatapi(notifiable)`` and returning a
    ``ChatAPIMessage``. The recipient is asked for its route first, the message's own ``to``
    is used when it has none.

    Arguments:
        client (ChatAPIClient): The gateway client. Built from the settings when omitted.
        route_name (str): The name the channel is routed under.
    """

    def __init__(
        self,
        client: Optional[ChatAPIClient] = None,
        route_name: str = settings.CHATAPI_ROUTE_NAME,
    ):
        self._owns_client = client is None
        self.client = client or create_client()
        self.route_name = route_name

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        """Close the gateway client if the channel built it."""
        if self._owns_client:
            await self.client.aclose()

    async def send(
        self, notifiable: Notifiable, notification: Notification
    ) -> List[Dict[str, Any]]:
        """Send the given notification, text first and then the attached file."""
        message = notification.to_chatapi(notifiable)
        to = notifiable.route_notification_for(self.route_name) or message.recipient

        responses = []
        if message.text:
            responses.append(await self.client.send_message(to, message.text))
        if message.attachment is not None:
            attachment = message.attachment
            responses.append(
                await self.client.send_file(
                    to, attachment.body, attachment.filename, attachment.mimetype
                )
            )
        if not responses:
            logger.warning("Notification %s has nothing to send", type(notification).__name__)
        return responses
