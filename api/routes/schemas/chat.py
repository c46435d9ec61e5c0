from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ChatIn(BaseModel):
    message: str | None = None


class MessageOut(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    message: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RecommendIn(BaseModel):
    query: str | None = None
    type: str | None = None     # plan / recipe / challenge / anything else
