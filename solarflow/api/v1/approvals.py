"""
Approval Pipeline API Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from solarflow.core.database import get_db
from solarflow.core.security import get_current_user
from solarflow.schemas import ApprovalCreate, ApprovalUpdate, ApprovalResponse, ApprovalProgress
from solarflow.services.approval_service import ApprovalService

router = APIRouter(
    prefix="/approvals",
    tags=["Approvals"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[ApprovalResponse])
async def list_approvals(
    clientId: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List approvals, optionally for one client"""
    return ApprovalService(db).get_all(clientId)


@router.get("/progress/{client_id}", response_model=ApprovalProgress)
async def get_client_progress(
    client_id: str,
    db: Session = Depends(get_db)
):
    """Percentage of pipeline steps approved for a client"""
    return ApprovalService(db).get_client_progress(client_id)


@router.post("", response_model=ApprovalResponse, status_code=status.HTTP_201_CREATED)
async def create_approval(
    approval_data: ApprovalCreate,
    db: Session = Depends(get_db)
):
    """Create an approval step for a client"""
    approval = ApprovalService(db).create(approval_data)
    db.commit()
    db.refresh(approval)
    return approval


@router.put("/{approval_id}", response_model=ApprovalResponse)
async def update_approval(
    approval_id: str,
    approval_data: ApprovalUpdate,
    db: Session = Depends(get_db)
):
    """Update approval status, remarks or document"""
    approval = ApprovalService(db).update(approval_id, approval_data)
    if not approval:
        raise HTTPException(status_code=404, detail="Approval not found")
    db.commit()
    db.refresh(approval)
    return approval
