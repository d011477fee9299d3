from datetime import datetime, timedelta, timezone

import pytest

from batepapo.core.exceptions import NotFoundError
from batepapo.models import Participant
from batepapo.services import participant_service, presence_service

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
TIMEOUT = timedelta(seconds=10)


class TestTouch:
    """Test heartbeat recording"""

    async def test_touch_updates_last_activity(self, store, add_participant):
        await add_participant("Ana", T0)
        later = T0 + timedelta(seconds=30)
        await presence_service.touch(store, "Ana", now=later)
        participant = await store.find_one(Participant, Participant.name == "Ana")
        assert participant.last_activity == later

    async def test_touch_sanitizes_name(self, store, add_participant):
        await add_participant("Ana", T0)
        later = T0 + timedelta(seconds=5)
        await presence_service.touch(store, " <i>Ana</i> ", now=later)
        participant = await store.find_one(Participant, Participant.name == "Ana")
        assert participant.last_activity == later

    async def test_touch_with_stored_escaped_name(self, store):
        participant = await participant_service.join(store, "&lt;b&gt;Ana&lt;/b&gt;", now=T0)
        assert participant.name == "&lt;b&gt;Ana&lt;/b&gt;"
        later = T0 + timedelta(seconds=5)
        await presence_service.touch(store, participant.name, now=later)
        found = await store.find_one(Participant, Participant.id == participant.id)
        assert found.last_activity == later

    async def test_touch_unknown_participant(self, store):
        with pytest.raises(NotFoundError):
            await presence_service.touch(store, "Ninguem")


class TestStaleness:
    """Test the staleness predicate and queries"""

    def test_is_stale_is_strict(self):
        participant = Participant(name="Ana", last_activity=T0)
        assert not presence_service.is_stale(participant, T0 + TIMEOUT, TIMEOUT)
        assert presence_service.is_stale(participant, T0 + TIMEOUT + timedelta(seconds=1), TIMEOUT)

    async def test_find_stale_and_list_active(self, store, add_participant):
        await add_participant("Velho", T0)
        await add_participant("Novo", T0 + timedelta(seconds=8))
        now = T0 + timedelta(seconds=15)

        stale = await presence_service.find_stale(store, now, TIMEOUT)
        active = await presence_service.list_active(store, now, TIMEOUT)

        assert [p.name for p in stale] == ["Velho"]
        assert [p.name for p in active] == ["Novo"]

    async def test_list_participants_in_join_order(self, store, add_participant):
        for name in ("Ana", "Bia", "Cid"):
            await add_participant(name)
        assert [p.name for p in await presence_service.list_participants(store)] == ["Ana", "Bia", "Cid"]
