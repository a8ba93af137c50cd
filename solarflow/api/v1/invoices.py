"""
Invoice API Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from solarflow.core.database import get_db
from solarflow.core.security import get_current_user
from solarflow.schemas import InvoiceCreate, InvoiceWithItems, InvoiceWithLineItems
from solarflow.services.invoice_service import InvoiceService
from solarflow.services.resolver import RelationshipResolver

router = APIRouter(
    prefix="/invoices",
    tags=["Invoices"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[InvoiceWithItems])
async def list_invoices(
    clientId: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List invoices, optionally for one client"""
    invoices = InvoiceService(db).get_all(clientId)
    return RelationshipResolver().resolve_invoices(invoices)


@router.get("/{invoice_id}", response_model=InvoiceWithItems)
async def get_invoice(
    invoice_id: str,
    db: Session = Depends(get_db)
):
    """Get invoice with client and line items"""
    invoice = InvoiceService(db).get_by_id(invoice_id)
    resolved = RelationshipResolver().resolve_invoice(invoice) if invoice else None
    if resolved is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return resolved


@router.post("", response_model=InvoiceWithLineItems, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    db: Session = Depends(get_db)
):
    """Create an invoice and its line items in one transaction"""
    invoice_service = InvoiceService(db)
    try:
        invoice = invoice_service.create(invoice_data)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(invoice)
    return invoice
