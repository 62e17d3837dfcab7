from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class NotificationCreate(BaseModel):
    message: str = Field(min_length=1)


class NotificationRead(BaseModel):
    id: int
    message: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class NotificationResponse(BaseModel):
    success: bool = True
    notification: NotificationRead


class NotificationListResponse(BaseModel):
    success: bool = True
    notifications: List[NotificationRead]
