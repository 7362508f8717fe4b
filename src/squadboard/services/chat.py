"""Pairwise direct messages with per-participant unread counters."""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from squadboard.core.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from squadboard.core.settings import settings
from squadboard.db.time import utcnow
from squadboard.db.transaction import run_transaction
from squadboard.models import Account, ChatMessage, Conversation

logger = logging.getLogger(__name__)

MESSAGE_MAX_LENGTH = 500
# Never a legal handle character, so the pairing cannot collide.
PAIR_SEPARATOR = ":"


def conversation_id(first: str, second: str) -> str:
    """Return the order-independent id of the conversation between two handles."""
    low, high = sorted((first, second))
    return f"{low}{PAIR_SEPARATOR}{high}"


@dataclass(frozen=True)
class InboxEntry:
    """A conversation annotated for one participant's inbox."""

    conversation: Conversation
    counterpart: str
    counterpart_display_name: str | None
    counterpart_avatar: str | None
    unread: int


class ConversationLedger:
    """Chat sessions, unread counters and soft-hide state."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.db = db
        self.clock = clock

    def _get_for_participant(self, db: Session, actor: str, conv_id: str) -> Conversation:
        conversation = db.get(Conversation, conv_id)
        if conversation is None:
            raise NotFoundError("Conversation not found")
        if actor not in conversation.participants:
            raise AuthorizationError("You are not part of this conversation")
        return conversation

    def send_message(self, sender: str, recipient: str, body: str) -> ChatMessage:
        """Append a message, creating the conversation on first contact.

        The message row, the recipient's unread increment, the preview fields
        and un-hiding the session for both sides commit together.
        """
        body = (body or "").strip()
        if not body:
            raise ValidationError("Message cannot be empty")
        if not recipient:
            raise ValidationError("Recipient is required")
        if sender == recipient:
            raise ValidationError("You cannot message yourself")
        if self.db.get(Account, recipient) is None:
            raise NotFoundError("Recipient not found")
        body = body[:MESSAGE_MAX_LENGTH]
        conv_id = conversation_id(sender, recipient)

        def work(db: Session) -> ChatMessage:
            conversation = db.get(Conversation, conv_id)
            now = self.clock()
            if conversation is None:
                low, high = sorted((sender, recipient))
                conversation = Conversation(
                    id=conv_id,
                    participant_a=low,
                    participant_b=high,
                    unread_counts={low: 0, high: 0},
                    hidden_for=[],
                    created_at=now,
                )
                db.add(conversation)

            message = ChatMessage(
                conversation_id=conv_id,
                sender=sender,
                body=body,
                created_at=now,
            )
            db.add(message)

            unread = dict(conversation.unread_counts or {})
            unread[recipient] = unread.get(recipient, 0) + 1
            conversation.unread_counts = unread
            conversation.last_message = body
            conversation.last_sender = sender
            conversation.updated_at = now
            hidden = list(conversation.hidden_for or [])
            if sender in hidden or recipient in hidden:
                conversation.hidden_for = [h for h in hidden if h not in (sender, recipient)]
            return message

        message = run_transaction(self.db, work)
        logger.debug("Message %s sent in %s", message.id, conv_id)
        return message

    def mark_read(self, actor: str, conv_id: str) -> Conversation:
        """Zero the actor's unread counter; no write when it is already zero."""

        def work(db: Session) -> Conversation:
            conversation = self._get_for_participant(db, actor, conv_id)
            unread = dict(conversation.unread_counts or {})
            if unread.get(actor, 0):
                unread[actor] = 0
                conversation.unread_counts = unread
            return conversation

        return run_transaction(self.db, work)

    def hide_session(self, actor: str, conv_id: str) -> Conversation:
        """Hide the conversation from the actor's inbox until new traffic arrives."""

        def work(db: Session) -> Conversation:
            conversation = self._get_for_participant(db, actor, conv_id)
            hidden = list(conversation.hidden_for or [])
            if actor not in hidden:
                conversation.hidden_for = [*hidden, actor]
            return conversation

        return run_transaction(self.db, work)

    def list_inbox(self, actor: str) -> list[InboxEntry]:
        """Return the actor's visible conversations, most recently active first."""
        conversations = self.db.scalars(
            select(Conversation)
            .where(
                or_(
                    Conversation.participant_a == actor,
                    Conversation.participant_b == actor,
                )
            )
            .order_by(Conversation.updated_at.desc(), Conversation.id)
        ).all()
        visible = [c for c in conversations if actor not in (c.hidden_for or [])]

        counterparts = {c.counterpart(actor) for c in visible}
        accounts: dict[str, Account] = {}
        if counterparts:
            accounts = {
                account.handle: account
                for account in self.db.scalars(
                    select(Account).where(Account.handle.in_(counterparts))
                )
            }

        entries = []
        for conversation in visible:
            other = conversation.counterpart(actor)
            account = accounts.get(other)
            entries.append(
                InboxEntry(
                    conversation=conversation,
                    counterpart=other,
                    counterpart_display_name=account.display_name if account else None,
                    counterpart_avatar=account.avatar if account else None,
                    unread=int((conversation.unread_counts or {}).get(actor, 0)),
                )
            )
        return entries

    def history(self, first: str, second: str) -> list[ChatMessage]:
        """Return the latest page of messages between two handles, oldest first."""
        conv_id = conversation_id(first, second)
        latest = self.db.scalars(
            select(ChatMessage)
            .where(ChatMessage.conversation_id == conv_id)
            .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
            .limit(settings.history_page_size)
        ).all()
        return list(reversed(latest))
