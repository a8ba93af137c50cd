"""
Invoice Service - Client invoices and their line items
"""
from typing import Optional, List
from sqlalchemy.orm import Session, joinedload, selectinload
from solarflow.models import Invoice, InvoiceItem
from solarflow.schemas import InvoiceCreate


class InvoiceService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Invoice).options(
            joinedload(Invoice.client),
            selectinload(Invoice.items).joinedload(InvoiceItem.item)
        )

    def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        return self._query().filter(Invoice.id == invoice_id).first()

    def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        return self.db.query(Invoice).filter(Invoice.invoice_number == invoice_number).first()

    def get_all(self, client_id: Optional[str] = None) -> List[Invoice]:
        query = self._query()
        if client_id:
            query = query.filter(Invoice.client_id == client_id)
        return query.order_by(Invoice.created_at).all()

    def create(self, invoice_data: InvoiceCreate) -> Invoice:
        """Create an invoice together with its line items.

        The invoice and its items are flushed in the caller's transaction, so a
        single commit writes both or neither.
        """
        if self.get_by_number(invoice_data.invoice_number):
            raise ValueError(f"Invoice number '{invoice_data.invoice_number}' already exists")

        invoice = Invoice(
            client_id=invoice_data.client_id,
            invoice_number=invoice_data.invoice_number,
            total_amount=invoice_data.total_amount,
            amount_paid=invoice_data.amount_paid,
            due_date=invoice_data.due_date,
            status=invoice_data.status.value,
            pdf_url=invoice_data.pdf_url
        )
        self.db.add(invoice)
        self.db.flush()

        for item_data in invoice_data.items:
            total_price = item_data.total_price
            if total_price is None:
                total_price = item_data.unit_price * item_data.quantity
            self.db.add(InvoiceItem(
                invoice_id=invoice.id,
                item_id=item_data.item_id,
                quantity=item_data.quantity,
                unit_price=item_data.unit_price,
                total_price=total_price
            ))

        self.db.flush()
        return invoice
