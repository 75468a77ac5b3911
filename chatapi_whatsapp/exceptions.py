import json
from typing import Optional

import httpx


class CouldNotSendNotification(Exception):
    """Base class for every error raised while talking to the Chat API gateway."""


class InvalidRequest(CouldNotSendNotification):
    """The request was rejected locally, before anything was sent."""


class ReceiverNotProvided(InvalidRequest):
    def __init__(self):
        super().__init__("Chat receiver not provided")


class FileNotProvided(InvalidRequest):
    def __init__(self):
        super().__init__("Chat file not provided")


class ServiceError(CouldNotSendNotification):
    """
    The gateway responded with an error status.

    Args:
        status (int): The HTTP status code of the response.
        description (str): The gateway's error description, or the HTTP error message.
    """

    def __init__(self, status: int, description: str):
        self.status = status
        self.description = description
        super().__init__(f"ChatAPI responded with an error `{status} - {description}`")

    @classmethod
    def from_http_error(cls, error: httpx.HTTPStatusError) -> "ServiceError":
        """Build the error from an httpx status error, preferring the body's description."""
        response = error.response
        # str(error) embeds the request URL, token included
        description = _description_from_body(response) or response.reason_phrase
        return cls(response.status_code, description)


class CommunicationError(CouldNotSendNotification):
    """The gateway could not be reached or its response could not be read."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def _description_from_body(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if isinstance(body, dict):
        return body.get("description") or None
    return None
