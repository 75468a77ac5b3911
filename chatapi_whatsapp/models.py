from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel


class FileAttachment(BaseModel):
    body: Union[str, bytes, Path]
    filename: Optional[str] = None
    mimetype: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "body": self.body,
            "filename": self.filename,
            "mimetype": self.mimetype,
        }


class ChatAPIMessage(BaseModel):
    """
    A message rendered by a notification for the Chat API channel.

    Built fluently::

        ChatAPIMessage.create("Your order shipped").to("17472822486").file(invoice_path)
    """

    recipient: Optional[str] = None
    text: Optional[str] = None
    attachment: Optional[FileAttachment] = None

    @classmethod
    def create(cls, msg: Optional[str] = None) -> "ChatAPIMessage":
        return cls(text=msg)

    def to(self, to: str) -> "ChatAPIMessage":
        self.recipient = to
        return self

    def msg(self, msg: Optional[str]) -> "ChatAPIMessage":
        self.text = msg
        return self

    def content(self, content: Optional[str]) -> "ChatAPIMessage":
        return self.msg(content)

    def file(
        self,
        file: Union[str, bytes, Path],
        filename: Optional[str] = None,
        mimetype: Optional[str] = None,
    ) -> "ChatAPIMessage":
        self.attachment = FileAttachment(body=file, filename=filename, mimetype=mimetype)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "to": self.recipient,
            "msg": self.text,
            "file": self.attachment.to_dict() if self.attachment else None,
        }
