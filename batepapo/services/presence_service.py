from typing import List, Optional
from datetime import datetime, timedelta

from batepapo.core.exceptions import NotFoundError
from batepapo.core.sanitize import sanitize
from batepapo.core.store import Store
from batepapo.models.participant import Participant
from batepapo.models.types import utcnow


async def touch(store: Store, name: str, now: Optional[datetime] = None) -> None:
    """Record activity for ``name``. Written straight to the store, no caching."""
    name = sanitize(name)
    updated = await store.update(
        Participant,
        {"last_activity": now or utcnow()},
        Participant.name == name,
    )
    if not updated:
        raise NotFoundError("Participant not found")


def is_stale(participant: Participant, now: datetime, timeout: timedelta) -> bool:
    return now - participant.last_activity > timeout


async def list_participants(store: Store) -> List[Participant]:
    return await store.find(Participant, order_by=Participant.id)


async def list_active(store: Store, now: datetime, timeout: timedelta) -> List[Participant]:
    return [p for p in await list_participants(store) if not is_stale(p, now, timeout)]


async def find_stale(store: Store, now: datetime, timeout: timedelta) -> List[Participant]:
    # Same boundary as is_stale: inactive for strictly longer than timeout
    return await store.find(
        Participant,
        Participant.last_activity < now - timeout,
        order_by=Participant.id,
    )
