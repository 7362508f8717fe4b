"""Direct message Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ChatSendRequest(BaseModel):
    """Schema for sending a direct message."""

    to: str = Field(..., description="Recipient handle")
    body: str = Field(..., description="Message text")


class ConversationRef(BaseModel):
    """Payload addressing a conversation by canonical id or by the other handle."""

    conversation_id: str | None = None
    with_handle: str | None = Field(None, alias="with")


class ChatMessageResponse(BaseModel):
    """Schema for a message returned by the API."""

    id: int
    conversation_id: str
    sender: str
    body: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InboxEntryResponse(BaseModel):
    """Conversation summary shown in a participant's inbox."""

    conversation_id: str
    counterpart: str
    counterpart_display_name: str | None
    counterpart_avatar: str | None
    last_message: str
    last_sender: str | None
    unread: int
    updated_at: datetime
