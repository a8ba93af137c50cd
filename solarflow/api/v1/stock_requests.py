"""
Stock Request API Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from solarflow.core.database import get_db
from solarflow.core.security import Scope, get_scope
from solarflow.schemas import (
    StockRequestCreate, StockRequestUpdate, StockRequestResponse, StockRequestWithDetails,
    StockRequestStatusEnum
)
from solarflow.services.resolver import RelationshipResolver
from solarflow.services.stock_request_service import StockRequestService

router = APIRouter(prefix="/stock-requests", tags=["Stock Requests"])


def _resolve_forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Only admins can resolve stock requests"
    )


@router.get("", response_model=List[StockRequestWithDetails])
async def list_stock_requests(
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """List stock requests visible to the current user"""
    requests = StockRequestService(db).get_all(scope.agent_id)
    return RelationshipResolver().resolve_stock_requests(requests)


@router.post("", response_model=StockRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_stock_request(
    request_data: StockRequestCreate,
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Raise a stock request; only admins may file it already resolved"""
    resolved = request_data.status != StockRequestStatusEnum.PENDING or request_data.approved_by is not None
    if resolved and not scope.is_admin:
        raise _resolve_forbidden()

    request = StockRequestService(db).create(request_data, scope)
    db.commit()
    db.refresh(request)
    return request


@router.put("/{request_id}", response_model=StockRequestResponse)
async def update_stock_request(
    request_id: str,
    request_data: StockRequestUpdate,
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Update a stock request; only admins may approve or deny"""
    changes = request_data.model_dump(exclude_unset=True)
    if ("status" in changes or "approved_by" in changes) and not scope.is_admin:
        raise _resolve_forbidden()

    request = StockRequestService(db).update(request_id, request_data, scope)
    if not request:
        raise HTTPException(status_code=404, detail="Stock request not found")
    db.commit()
    db.refresh(request)
    return request
