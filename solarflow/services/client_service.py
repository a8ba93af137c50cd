"""
Client Service - Business Logic for Clients
"""
from typing import Optional, List
from sqlalchemy.orm import Session, joinedload, selectinload
from solarflow.models import Client
from solarflow.schemas import ClientCreate, ClientUpdate
from solarflow.core.security import Scope


class ClientService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self, agent_id: Optional[str] = None):
        query = self.db.query(Client).options(
            joinedload(Client.assigned_agent),
            selectinload(Client.approvals),
            selectinload(Client.tasks)
        )
        if agent_id:
            query = query.filter(Client.assigned_agent_id == agent_id)
        return query

    def get_by_id(self, client_id: str, agent_id: Optional[str] = None) -> Optional[Client]:
        return self._query(agent_id).filter(Client.id == client_id).first()

    def get_all(self, agent_id: Optional[str] = None) -> List[Client]:
        return self._query(agent_id).order_by(Client.created_at).all()

    def create(self, client_data: ClientCreate, scope: Scope) -> Client:
        assigned_agent_id = client_data.assigned_agent_id
        # Agents own the clients they bring in unless told otherwise
        if assigned_agent_id is None and not scope.is_admin:
            assigned_agent_id = scope.user_id

        client = Client(
            name=client_data.name,
            email=client_data.email,
            phone=client_data.phone,
            address=client_data.address,
            assigned_agent_id=assigned_agent_id,
            project_status=client_data.project_status.value
        )
        self.db.add(client)
        self.db.flush()
        return client

    def update(self, client_id: str, client_data: ClientUpdate, agent_id: Optional[str] = None) -> Optional[Client]:
        client = self.get_by_id(client_id, agent_id)
        if not client:
            return None

        update_data = client_data.model_dump(exclude_unset=True, mode="json")
        for key, value in update_data.items():
            setattr(client, key, value)

        self.db.flush()
        return client
