"""Background eviction of participants that stopped sending heartbeats.

Each stale participant is handled as a paired write: the departure message
is inserted first, then the participant row is deleted by id. A crash
between the two leaves an extra departure notice rather than a participant
that vanished without one.

The stale query and concurrent heartbeats race. A participant whose
heartbeat lands while a sweep is running may be evicted (or kept) for one
cycle; nothing locks against that. The guarantee is bounded staleness: an
inactive participant is gone within one sweep period after its timeout.
"""
import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional
from datetime import datetime, timedelta

from batepapo.core.config import settings
from batepapo.core.exceptions import StoreError
from batepapo.core.store import Store
from batepapo.models.message import Message, MessageType
from batepapo.models.participant import Participant
from batepapo.models.types import utcnow
from batepapo.services.presence_service import find_stale

logger = logging.getLogger(__name__)

DEPARTURE_TEXT = "sai da sala..."


class SweepState(str, Enum):
    IDLE = "IDLE"
    SCANNING = "SCANNING"
    EVICTING = "EVICTING"


class EvictionSweeper:
    def __init__(
        self,
        store: Store,
        timeout: timedelta,
        clock: Callable[[], datetime] = utcnow,
        broadcast: Optional[str] = None,
        time_format: Optional[str] = None,
    ):
        self.store = store
        self.timeout = timeout
        self.clock = clock
        self.broadcast = broadcast or settings.BROADCAST_NAME
        self.time_format = time_format or settings.TIME_FORMAT
        self.state = SweepState.IDLE

    async def sweep(self) -> List[str]:
        """Run one scan-and-evict cycle and return the names evicted.

        Never raises for store failures: a failed scan evicts nobody and a
        failed candidate is skipped. Both are logged and left for the next
        cycle.
        """
        now = self.clock()
        self.state = SweepState.SCANNING
        try:
            try:
                stale = await find_stale(self.store, now, self.timeout)
            except StoreError as exc:
                logger.warning("Sweep skipped, store unavailable: %s", exc.detail)
                return []

            self.state = SweepState.EVICTING
            if not stale:
                return []

            results = await asyncio.gather(
                *(self._evict(participant, now) for participant in stale),
                return_exceptions=True,
            )
            evicted = []
            for participant, result in zip(stale, results):
                if isinstance(result, Exception):
                    logger.error(
                        "Eviction failed for %s", participant.name,
                        exc_info=result, extra={"participant": participant.name},
                    )
                elif result:
                    evicted.append(participant.name)
            if evicted:
                logger.info("Evicted %d participant(s)", len(evicted), extra={"participants": evicted})
            return evicted
        finally:
            self.state = SweepState.IDLE

    async def _evict(self, participant: Participant, now: datetime) -> bool:
        # message first, then delete; never the other way round
        await self.store.insert(
            Message(
                sender=participant.name,
                to=self.broadcast,
                text=DEPARTURE_TEXT,
                type=MessageType.STATUS,
                time=now.strftime(self.time_format),
            )
        )
        deleted = await self.store.delete(Participant, Participant.id == participant.id)
        if not deleted:
            logger.warning("Participant %s already removed", participant.name)
        return deleted
