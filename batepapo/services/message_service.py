from typing import List, Optional, Tuple
from datetime import datetime
from sqlalchemy import or_

from batepapo.core.config import settings
from batepapo.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from batepapo.core.sanitize import sanitize
from batepapo.core.store import Store
from batepapo.models.message import Message, MessageType, USER_MESSAGE_TYPES
from batepapo.models.participant import Participant
from batepapo.models.types import utcnow


def _clean_body(to: str, text: str, message_type) -> Tuple[str, str, MessageType]:
    to, text = sanitize(to), sanitize(text)
    if not to:
        raise ValidationError("'to' must not be empty")
    if not text:
        raise ValidationError("'text' must not be empty")
    try:
        message_type = MessageType(sanitize(getattr(message_type, "value", message_type)))
    except ValueError:
        raise ValidationError("'type' must be one of: message, private_message") from None
    if message_type not in USER_MESSAGE_TYPES:
        raise ValidationError("'type' must be one of: message, private_message")
    return to, text, message_type


async def _get_owned(store: Store, message_id: int, caller: str) -> Message:
    message = await store.find_one(Message, Message.id == message_id)
    if not message:
        raise NotFoundError("Message not found")
    # arrival/departure notices belong to join and eviction, not to the author
    if message.type == MessageType.STATUS:
        raise AuthorizationError("Status messages cannot be changed")
    # stored sender was sanitized on write; compare like with like
    if message.sender != sanitize(caller):
        raise AuthorizationError()
    return message


async def post(store: Store, sender: str, to: str, text: str, message_type, now: Optional[datetime] = None) -> Message:
    sender = sanitize(sender)
    to, text, message_type = _clean_body(to, text, message_type)

    participant = await store.find_one(Participant, Participant.name == sender)
    if not participant:
        raise NotFoundError("Participant not found")

    now = now or utcnow()
    return await store.insert(
        Message(sender=sender, to=to, text=text, type=message_type, time=now.strftime(settings.TIME_FORMAT))
    )


async def list_messages(store: Store, caller: str, limit: Optional[int] = None) -> List[Message]:
    """Messages visible to ``caller``, oldest first.

    With ``limit`` only the most recent ``limit`` of them are returned,
    still oldest first.
    """
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0):
        raise ValidationError("limit must be a positive integer")
    caller = sanitize(caller)
    newest_first = await store.find(
        Message,
        or_(
            Message.to == settings.BROADCAST_NAME,
            Message.sender == caller,
            Message.to == caller,
        ),
        order_by=Message.id.desc(),
        limit=limit,
    )
    return list(reversed(newest_first))


async def edit(store: Store, message_id: int, caller: str, to: str, text: str, message_type) -> Message:
    await _get_owned(store, message_id, caller)
    to, text, message_type = _clean_body(to, text, message_type)

    # time is left alone so the message keeps its place in the history
    updated = await store.update(
        Message,
        {"to": to, "text": text, "type": message_type},
        Message.id == message_id,
    )
    message = await store.find_one(Message, Message.id == message_id) if updated else None
    if not message:
        raise NotFoundError("Message not found")
    return message


async def remove(store: Store, message_id: int, caller: str) -> None:
    await _get_owned(store, message_id, caller)
    deleted = await store.delete(Message, Message.id == message_id)
    if not deleted:
        raise NotFoundError("Message not found")
