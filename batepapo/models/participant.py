from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field

from .types import UTCDateTime, utcnow


class Participant(SQLModel, table=True):
    __tablename__ = "participants"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, sa_column_kwargs={"unique": True})
    # aware UTC; refreshed on every heartbeat
    last_activity: datetime = Field(default_factory=utcnow, index=True, sa_type=UTCDateTime)
