"""
Stock Request Service - Agent requests for inventory
"""
from datetime import datetime
from typing import Optional, List
from sqlalchemy.orm import Session, joinedload
from solarflow.core.security import Scope
from solarflow.models import StockRequest, StockRequestStatus
from solarflow.schemas import StockRequestCreate, StockRequestUpdate


class StockRequestService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self, agent_id: Optional[str] = None):
        query = self.db.query(StockRequest).options(
            joinedload(StockRequest.agent),
            joinedload(StockRequest.item),
            joinedload(StockRequest.approved_by_user)
        )
        if agent_id:
            query = query.filter(StockRequest.agent_id == agent_id)
        return query

    def get_by_id(self, request_id: str, agent_id: Optional[str] = None) -> Optional[StockRequest]:
        return self._query(agent_id).filter(StockRequest.id == request_id).first()

    def get_all(self, agent_id: Optional[str] = None) -> List[StockRequest]:
        return self._query(agent_id).order_by(StockRequest.created_at).all()

    def create(self, request_data: StockRequestCreate, scope: Scope) -> StockRequest:
        """Agents always file requests under their own id; admins may file for any agent"""
        request = StockRequest(
            agent_id=(request_data.agent_id if scope.is_admin else None) or scope.user_id,
            item_id=request_data.item_id,
            quantity_requested=request_data.quantity_requested,
            status=request_data.status.value,
            reason=request_data.reason,
            approved_by=request_data.approved_by
        )
        if request.status != StockRequestStatus.PENDING.value and request.approved_by is None:
            request.approved_by = scope.user_id
        self.db.add(request)
        self.db.flush()
        return request

    def update(self, request_id: str, request_data: StockRequestUpdate, scope: Scope) -> Optional[StockRequest]:
        """Apply a partial update.

        Resolving a request (approve / deny) is reserved for admins; callers are
        expected to check that before calling. When an admin resolves a request
        without naming an approver, the admin is recorded as the approver.
        """
        request = self.get_by_id(request_id, scope.agent_id)
        if not request:
            return None

        update_data = request_data.model_dump(exclude_unset=True, mode="json")
        for key, value in update_data.items():
            setattr(request, key, value)

        resolved = update_data.get("status") in (
            StockRequestStatus.APPROVED.value, StockRequestStatus.DENIED.value
        )
        if resolved and "approved_by" not in update_data:
            request.approved_by = scope.user_id
        request.updated_at = datetime.utcnow()

        self.db.flush()
        return request
