from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field
from app.models.client import ClientBase


class ClientCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ClientRead(ClientBase):
    client_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ClientResponse(BaseModel):
    success: bool = True
    client: ClientRead


class ClientListResponse(BaseModel):
    success: bool = True
    clients: List[ClientRead]
