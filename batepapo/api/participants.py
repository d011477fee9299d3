from typing import List
from fastapi import APIRouter, Depends, Response, status

from batepapo.core.database import get_store
from batepapo.core.store import Store
from batepapo.schemas.participant import ParticipantCreate, ParticipantRead
from batepapo.services import participant_service, presence_service

router = APIRouter(prefix="/participants", tags=["participants"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_participant(payload: ParticipantCreate, store: Store = Depends(get_store)):
    await participant_service.join(store, payload.name)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("", response_model=List[ParticipantRead])
async def list_participants(store: Store = Depends(get_store)):
    return await presence_service.list_participants(store)
