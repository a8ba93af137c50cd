"""
Client API Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from solarflow.core.database import get_db
from solarflow.core.security import Scope, get_scope
from solarflow.schemas import ClientCreate, ClientUpdate, ClientResponse, ClientWithAgent
from solarflow.services.client_service import ClientService
from solarflow.services.resolver import RelationshipResolver

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=List[ClientWithAgent])
async def list_clients(
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """List clients visible to the current user"""
    clients = ClientService(db).get_all(scope.agent_id)
    return RelationshipResolver().resolve_clients(clients)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Create a new client"""
    client = ClientService(db).create(client_data, scope)
    db.commit()
    db.refresh(client)
    return client


@router.get("/{client_id}", response_model=ClientWithAgent)
async def get_client(
    client_id: str,
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Get client with agent, approvals and tasks"""
    client = ClientService(db).get_by_id(client_id, scope.agent_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return RelationshipResolver().resolve_client(client)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    client_data: ClientUpdate,
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Update client"""
    client = ClientService(db).update(client_id, client_data, scope.agent_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    db.commit()
    db.refresh(client)
    return client
