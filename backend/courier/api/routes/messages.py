"""Message Routes — send, fetch and page through messages.

Invariants:
    - send and search authorize the token against the `from` identity first
    - fetch by id requires a token that verifies, for any identity
    - every authorization failure is 401 "Access denied", whatever the cause
"""

from fastapi import APIRouter, Depends, Response, status

from courier.api.dependencies import (
    AccessToken,
    authorize_caller,
    get_message_service,
    get_session_authority,
    verify_caller,
)
from courier.core.session_authority import SessionAuthority
from courier.schemas.message import (
    MessageCreatedResponse,
    MessageResponse,
    SearchMessage,
    SendMessage,
)
from courier.services.message_service import MessageService

router = APIRouter(prefix="/api/v1/message", tags=["messages"])


@router.post(
    "/send", response_model=MessageCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    body: SendMessage,
    response: Response,
    token: AccessToken,
    messages: MessageService = Depends(get_message_service),
    authority: SessionAuthority = Depends(get_session_authority),
):
    """Send a message from the token's identity to another identity."""
    authorize_caller(authority, token, body.sender)
    message_id = await messages.create(body.sender, body.recipient, body.body)
    response.headers["Location"] = f"/message/{message_id}"
    return MessageCreatedResponse(id=message_id)


@router.get(
    "/{message_id}", response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def get_message(
    message_id: int,
    token: AccessToken,
    messages: MessageService = Depends(get_message_service),
    authority: SessionAuthority = Depends(get_session_authority),
):
    verify_caller(authority, token)
    return MessageResponse.from_model(await messages.get(message_id))


@router.post(
    "", response_model=list[MessageResponse],
    status_code=status.HTTP_202_ACCEPTED,
)
async def find_messages(
    body: SearchMessage,
    token: AccessToken,
    messages: MessageService = Depends(get_message_service),
    authority: SessionAuthority = Depends(get_session_authority),
):
    """Messages from `from` with id >= `since`, newest first, at most `limit`."""
    authorize_caller(authority, token, body.sender)
    found = await messages.find(body.since, body.sender, body.limit)
    return [MessageResponse.from_model(m) for m in found]
