import logging
from typing import Optional
from datetime import datetime

from batepapo.core.config import settings
from batepapo.core.exceptions import ConflictError, StoreError, ValidationError
from batepapo.core.sanitize import sanitize
from batepapo.core.store import Store
from batepapo.models.message import Message, MessageType
from batepapo.models.participant import Participant
from batepapo.models.types import utcnow

logger = logging.getLogger(__name__)

ARRIVAL_TEXT = "entra na sala..."


async def join(store: Store, raw_name: str, now: Optional[datetime] = None) -> Participant:
    """Register a participant and announce the arrival.

    Participant is written first, then the arrival message. If the message
    cannot be written the participant row is removed again and the store
    error propagates, so a join either produces both records or fails.
    """
    name = sanitize(raw_name)
    if not name:
        raise ValidationError("name must not be empty")
    if name == settings.BROADCAST_NAME:
        raise ConflictError(f"'{name}' is reserved")

    existing = await store.find_one(Participant, Participant.name == name)
    if existing:
        raise ConflictError("Name already in use")

    now = now or utcnow()
    participant = await store.insert(Participant(name=name, last_activity=now))

    try:
        await store.insert(
            Message(
                sender=name,
                to=settings.BROADCAST_NAME,
                text=ARRIVAL_TEXT,
                type=MessageType.STATUS,
                time=now.strftime(settings.TIME_FORMAT),
            )
        )
    except StoreError:
        logger.error("Arrival message failed, rolling back join", extra={"participant": name})
        await store.delete(Participant, Participant.id == participant.id)
        raise

    logger.info("Participant joined", extra={"participant": name})
    return participant
