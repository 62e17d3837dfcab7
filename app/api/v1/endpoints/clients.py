"""
Client Endpoints Module

This module provides endpoints for managing clients. Clients are shared resources:
every authenticated employee can list them, managers and admins add and remove them.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy import update
from sqlmodel import Session, select
from app.api import deps
from app.core.errors import NotFound
from app.db.session import get_db
from app.models.client import Client
from app.models.employee import Employee
from app.models.project import Project
from app.schemas.client import ClientCreate, ClientListResponse, ClientRead, ClientResponse
from app.schemas.common import MessageResponse

router = APIRouter()


@router.get("", response_model=ClientListResponse)
def list_clients(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    clients = db.exec(select(Client).order_by(Client.client_id)).all()
    return ClientListResponse(clients=[ClientRead.model_validate(c) for c in clients])


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client_in: ClientCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Add a new client. ``name`` and ``email`` are required.
    """
    client = Client(**client_in.model_dump())
    db.add(client)
    db.commit()
    db.refresh(client)
    return ClientResponse(client=ClientRead.model_validate(client))


@router.delete("/{client_id}", response_model=MessageResponse)
def delete_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Delete a client.

    Projects that referenced the client are kept and lose their client reference.
    """
    client = db.get(Client, client_id)
    if not client:
        raise NotFound("Client not found")

    db.exec(update(Project).where(Project.client_id == client_id).values(client_id=None))
    db.delete(client)
    db.commit()
    return MessageResponse(message="Client deleted successfully")
