import uuid
from pydantic import BaseModel


class PolkaEventData(BaseModel):
    user_id: uuid.UUID


class PolkaEvent(BaseModel):
    event: str
    data: PolkaEventData
