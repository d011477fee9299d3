from fastapi import APIRouter, Depends, Header, Response, status

from batepapo.core.database import get_store
from batepapo.core.store import Store
from batepapo.services import presence_service

router = APIRouter(tags=["status"])


@router.post("/status")
async def heartbeat(user: str = Header(...), store: Store = Depends(get_store)):
    await presence_service.touch(store, user)
    return Response(status_code=status.HTTP_200_OK)
