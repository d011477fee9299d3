from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field


class MessageType(str, Enum):
    MESSAGE = "message"
    PRIVATE_MESSAGE = "private_message"
    STATUS = "status"


# kinds a participant may author; status messages come from join/eviction
USER_MESSAGE_TYPES = (MessageType.MESSAGE, MessageType.PRIVATE_MESSAGE)


class Message(SQLModel, table=True):
    __tablename__ = "messages"

    # autoincrement id doubles as insertion order
    id: Optional[int] = Field(default=None, primary_key=True)
    sender: str = Field(index=True)
    to: str = Field(index=True)
    text: str
    type: MessageType
    time: str
