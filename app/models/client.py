"""
Client Model Module

This module defines the Client model representing customer entities in the system.
Clients are shared resources readable by every authenticated employee; only managers
and admins can create or delete them.
"""
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field

from app.models.base import UTCDateTime, utcnow


class ClientBase(SQLModel):
    # Required customer information
    name: str = Field(nullable=False)
    email: str = Field(nullable=False)

    # Optional contact details
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class Client(ClientBase, table=True):
    """
    Client model representing a customer organization.

    Projects may reference one client; the reference is nullable.

    Attributes:
        client_id: Auto-incrementing primary key
        name: Customer name (required)
        email: Contact email (required)
        contact_person: Primary contact person at the client
        phone: Contact phone number
        address: Postal address
        created_at: Timestamp of when the client record was created
        updated_at: Timestamp of the last modification
    """
    __tablename__ = "clients"

    # Primary key
    client_id: Optional[int] = Field(default=None, primary_key=True)

    # Audit timestamps - automatically set to current UTC time
    created_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime)
