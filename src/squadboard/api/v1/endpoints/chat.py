# src/squadboard/api/v1/endpoints/chat.py
"""Direct message actions."""

from __future__ import annotations

from typing import Any

from squadboard.api.v1.actions import action
from squadboard.api.v1.dependencies import RequestContext
from squadboard.core.errors import ValidationError
from squadboard.schemas.chat import (
    ChatMessageResponse,
    ChatSendRequest,
    ConversationRef,
    InboxEntryResponse,
)
from squadboard.services.chat import ConversationLedger, conversation_id


def _resolve_conversation_id(ctx: RequestContext, actor: str) -> str:
    ref = ctx.parse(ConversationRef)
    if ref.conversation_id:
        return ref.conversation_id
    if ref.with_handle:
        return conversation_id(actor, ref.with_handle)
    raise ValidationError("conversation_id or with is required")


@action("POST", "chat_send")
def chat_send(ctx: RequestContext) -> dict[str, Any]:
    """Send a direct message from the caller."""
    sender = ctx.require_account()
    payload = ctx.parse(ChatSendRequest)
    message = ConversationLedger(ctx.db).send_message(sender.handle, payload.to, payload.body)
    return {
        "conversation_id": message.conversation_id,
        "message": ChatMessageResponse.model_validate(message).model_dump(mode="json"),
    }


@action("POST", "chat_read")
def chat_read(ctx: RequestContext) -> dict[str, Any]:
    """Reset the caller's unread counter for a conversation."""
    actor = ctx.require_account().handle
    conv_id = _resolve_conversation_id(ctx, actor)
    ConversationLedger(ctx.db).mark_read(actor, conv_id)
    return {"conversation_id": conv_id}


@action("POST", "delete_chat_session")
def delete_chat_session(ctx: RequestContext) -> dict[str, Any]:
    """Hide a conversation from the caller's inbox until new traffic arrives."""
    actor = ctx.require_account().handle
    conv_id = _resolve_conversation_id(ctx, actor)
    ConversationLedger(ctx.db).hide_session(actor, conv_id)
    return {"conversation_id": conv_id}


@action("GET", "chat_inbox")
def chat_inbox(ctx: RequestContext) -> dict[str, Any]:
    """List the caller's visible conversations."""
    actor = ctx.require_account().handle
    entries = ConversationLedger(ctx.db).list_inbox(actor)
    return {
        "sessions": [
            InboxEntryResponse(
                conversation_id=entry.conversation.id,
                counterpart=entry.counterpart,
                counterpart_display_name=entry.counterpart_display_name,
                counterpart_avatar=entry.counterpart_avatar,
                last_message=entry.conversation.last_message,
                last_sender=entry.conversation.last_sender,
                unread=entry.unread,
                updated_at=entry.conversation.updated_at,
            ).model_dump(mode="json")
            for entry in entries
        ]
    }


@action("GET", "chat_history")
def chat_history(ctx: RequestContext) -> dict[str, Any]:
    """Return the latest messages between the caller and another handle."""
    actor = ctx.require_account().handle
    other = ctx.params.get("with")
    if not other:
        raise ValidationError("with is required")
    messages = ConversationLedger(ctx.db).history(actor, str(other))
    return {
        "conversation_id": conversation_id(actor, str(other)),
        "messages": [
            ChatMessageResponse.model_validate(message).model_dump(mode="json")
            for message in messages
        ],
    }
