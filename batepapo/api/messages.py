from typing import List, Optional
from fastapi import APIRouter, Depends, Header, Query, Response, status

from batepapo.core.database import get_store
from batepapo.core.store import Store
from batepapo.schemas.message import MessageCreate, MessageRead
from batepapo.services import message_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def post_message(payload: MessageCreate, user: str = Header(...), store: Store = Depends(get_store)):
    await message_service.post(store, user, payload.to, payload.text, payload.type)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("", response_model=List[MessageRead])
async def list_messages(
    user: str = Header(...),
    limit: Optional[int] = Query(default=None),
    store: Store = Depends(get_store),
):
    return await message_service.list_messages(store, user, limit=limit)


@router.put("/{message_id}", response_model=MessageRead)
async def edit_message(message_id: int, payload: MessageCreate, user: str = Header(...), store: Store = Depends(get_store)):
    return await message_service.edit(store, message_id, user, payload.to, payload.text, payload.type)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(message_id: int, user: str = Header(...), store: Store = Depends(get_store)):
    await message_service.remove(store, message_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
