from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ParticipantCreate(BaseModel):
    name: str = Field(min_length=1)


class ParticipantRead(BaseModel):
    id: int
    name: str
    last_activity: datetime

    model_config = ConfigDict(from_attributes=True)
