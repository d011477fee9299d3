# models package for SQLModel models
from .participant import Participant  # noqa: F401  (import for metadata registration)
from .message import Message, MessageType, USER_MESSAGE_TYPES  # noqa: F401
from .types import UTCDateTime, utcnow  # noqa: F401
