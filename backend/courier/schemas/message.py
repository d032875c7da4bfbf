"""Message Schemas — send, search and message views.

Invariants:
    - `from`/`to`/`message` on the wire map to sender/recipient/body in Python
    - SearchMessage.limit is optional; absent means the service default (5)
    - Only lower bounds: body non-empty, limit >= 1; no upper caps on either
"""

from pydantic import BaseModel, ConfigDict, Field

from courier.models.message import Message


class SendMessage(BaseModel):
    """Body of POST /message/send."""
    model_config = ConfigDict(populate_by_name=True)

    sender: int = Field(alias="from")
    recipient: int = Field(alias="to")
    body: str = Field(alias="message", min_length=1)


class SearchMessage(BaseModel):
    """Body of POST /message — keyset page over one sender's history."""
    model_config = ConfigDict(populate_by_name=True)

    sender: int = Field(alias="from")
    since: int
    limit: int | None = Field(None, ge=1)


class MessageCreatedResponse(BaseModel):
    id: int


class MessageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    sender: int = Field(alias="from")
    recipient: int = Field(alias="to")
    body: str = Field(alias="message")

    @classmethod
    def from_model(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.id, sender=message.sender,
            recipient=message.recipient, body=message.body,
        )
