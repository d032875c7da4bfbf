"""Message/User schemas — wire aliases and boundary validation."""

import pytest
from pydantic import ValidationError

from courier.models.message import Message
from courier.schemas.message import MessageResponse, SearchMessage, SendMessage
from courier.schemas.user import UserCredentials


def test_send_message_reads_wire_names():
    msg = SendMessage.model_validate({"from": 1, "to": 2, "message": "hi"})
    assert (msg.sender, msg.recipient, msg.body) == (1, 2, "hi")


def test_send_message_rejects_empty_body():
    with pytest.raises(ValidationError):
        SendMessage.model_validate({"from": 1, "to": 2, "message": ""})


def test_search_limit_is_optional():
    search = SearchMessage.model_validate({"from": 1, "since": 3})
    assert search.limit is None
    assert search.since == 3


@pytest.mark.parametrize("limit", [0, -1])
def test_search_limit_bounds(limit):
    with pytest.raises(ValidationError):
        SearchMessage.model_validate({"from": 1, "since": 1, "limit": limit})


def test_message_response_dumps_wire_names():
    response = MessageResponse.from_model(
        Message(id=5, sender=1, recipient=2, body="hi"),
    )
    assert response.model_dump(by_alias=True) == {
        "id": 5, "from": 1, "to": 2, "message": "hi",
    }


def test_credentials_strip_username():
    creds = UserCredentials(username="  juan ", password="pw")
    assert creds.username == "juan"


def test_credentials_reject_empty_password():
    with pytest.raises(ValidationError):
        UserCredentials(username="juan", password="")


def test_search_limit_has_no_upper_cap():
    search = SearchMessage.model_validate({"from": 1, "since": 1, "limit": 10_000})
    assert search.limit == 10_000


def test_send_message_accepts_long_body():
    body = "x" * 50_000
    assert SendMessage.model_validate({"from": 1, "to": 2, "message": body}).body == body
