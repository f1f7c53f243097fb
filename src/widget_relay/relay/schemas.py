"""Pydantic schemas for the public chat relay endpoint."""

from pydantic import Field, StrictInt

from widget_relay.common.schemas import CamelModel


class ChatSendRequest(CamelModel):
    message: str = Field(..., min_length=1)
    session_id: str = Field(..., min_length=1)
    config_id: StrictInt = Field(..., gt=0)


class ChatReplyData(CamelModel):
    response: str
    session_id: str


class ChatSendResponse(CamelModel):
    success: bool = True
    data: ChatReplyData
