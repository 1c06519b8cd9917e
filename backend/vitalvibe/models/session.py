"""
Session Models - chat sessions and their turns.
"""

import datetime as dt
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel, utc_now


class ChatTurn(CamelModel):
    """One message of a conversation."""
    role: Literal["user", "assistant"]
    content: str
    timestamp: dt.datetime = Field(default_factory=utc_now)


class SessionCreate(CamelModel):
    user_id: Optional[str] = None
    title: Optional[str] = None


class ChatLogRequest(CamelModel):
    """Append the user's message and/or the assistant's reply to a session."""
    session_id: str = Field(..., min_length=1)
    user_message: Optional[str] = None
    ai_response: Optional[str] = None
    user_id: Optional[str] = None
