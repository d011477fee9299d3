from typing import Literal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from batepapo.models.message import MessageType


# Input schema for posting and editing messages
class MessageCreate(BaseModel):
    to: str = Field(min_length=1)
    text: str = Field(min_length=1)
    type: Literal["message", "private_message"]


# Output schema; the author is exposed as "from"
class MessageRead(BaseModel):
    id: int
    sender: str = Field(validation_alias=AliasChoices("sender", "from"), serialization_alias="from")
    to: str
    text: str
    type: MessageType
    time: str

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )
