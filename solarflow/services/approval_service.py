"""
Approval Service - Government approval pipeline steps
"""
from datetime import datetime
from typing import Optional, List
from sqlalchemy.orm import Session
from solarflow.core.formatting import round_half_up
from solarflow.models import Approval, ApprovalStatus, APPROVAL_STEPS
from solarflow.schemas import ApprovalCreate, ApprovalUpdate, ApprovalProgress


class ApprovalService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, approval_id: str) -> Optional[Approval]:
        return self.db.query(Approval).filter(Approval.id == approval_id).first()

    def get_all(self, client_id: Optional[str] = None) -> List[Approval]:
        query = self.db.query(Approval)
        if client_id:
            query = query.filter(Approval.client_id == client_id)
        return query.all()

    def create(self, approval_data: ApprovalCreate) -> Approval:
        approval = Approval(
            client_id=approval_data.client_id,
            step=approval_data.step.value,
            status=approval_data.status.value,
            remarks=approval_data.remarks,
            document_url=approval_data.document_url
        )
        self.db.add(approval)
        self.db.flush()
        return approval

    def update(self, approval_id: str, approval_data: ApprovalUpdate) -> Optional[Approval]:
        approval = self.get_by_id(approval_id)
        if not approval:
            return None

        update_data = approval_data.model_dump(exclude_unset=True, mode="json")
        for key, value in update_data.items():
            setattr(approval, key, value)
        approval.updated_at = datetime.utcnow()

        self.db.flush()
        return approval

    def get_client_progress(self, client_id: str) -> ApprovalProgress:
        """Share of the pipeline steps a client has had approved"""
        approved = self.db.query(Approval).filter(
            Approval.client_id == client_id,
            Approval.status == ApprovalStatus.APPROVED.value
        ).count()
        total_steps = len(APPROVAL_STEPS)
        return ApprovalProgress(
            client_id=client_id,
            completed_steps=approved,
            total_steps=total_steps,
            percentage=round_half_up(approved * 100 / total_steps)
        )
