"""
Relationship Resolver - attaches related records to entity rows

Rows whose required references cannot be resolved are dropped from the
result set. Every drop is recorded with its reason and logged, it is never
raised as an error.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

from solarflow.models import Client, Task, StockRequest, Invoice
from solarflow.schemas import (
    ClientResponse, ClientWithAgent, TaskWithClient, StockRequestWithDetails,
    InvoiceResponse, InvoiceWithItems, InvoiceItemWithInventory
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DroppedRow:
    entity: str
    row_id: str
    reason: str


class RelationshipResolver:
    def __init__(self):
        self.dropped: List[DroppedRow] = []

    def _drop(self, entity: str, row_id: str, reason: str):
        self.dropped.append(DroppedRow(entity, row_id, reason))
        logger.warning(f"Dropping {entity} {row_id}: {reason}")

    def _missing_reason(self, required: Dict[str, object]) -> Optional[str]:
        missing = [name for name, value in required.items() if value is None]
        if missing:
            return "missing " + ", ".join(missing)
        return None

    # ==================== CLIENTS ====================

    def resolve_client(self, client: Client) -> ClientWithAgent:
        # Every relation of a client is optional, so clients are never dropped
        return ClientWithAgent.model_validate(client)

    def resolve_clients(self, clients: List[Client]) -> List[ClientWithAgent]:
        return [self.resolve_client(client) for client in clients]

    # ==================== TASKS ====================

    def resolve_task(self, task: Task) -> Optional[TaskWithClient]:
        reason = self._missing_reason({
            "client": task.client,
            "assigned agent": task.assigned_agent,
        })
        if reason:
            self._drop("task", task.id, reason)
            return None
        return TaskWithClient.model_validate(task)

    def resolve_tasks(self, tasks: List[Task]) -> List[TaskWithClient]:
        resolved = (self.resolve_task(task) for task in tasks)
        return [task for task in resolved if task is not None]

    # ==================== STOCK REQUESTS ====================

    def resolve_stock_request(self, request: StockRequest) -> Optional[StockRequestWithDetails]:
        reason = self._missing_reason({
            "agent": request.agent,
            "item": request.item,
        })
        if reason:
            self._drop("stock request", request.id, reason)
            return None
        return StockRequestWithDetails.model_validate(request)

    def resolve_stock_requests(self, requests: List[StockRequest]) -> List[StockRequestWithDetails]:
        resolved = (self.resolve_stock_request(request) for request in requests)
        return [request for request in resolved if request is not None]

    # ==================== INVOICES ====================

    def resolve_invoice(self, invoice: Invoice) -> Optional[InvoiceWithItems]:
        if invoice.client is None:
            self._drop("invoice", invoice.id, "missing client")
            return None

        items = []
        for line in invoice.items:
            if line.item is None:
                self._drop("invoice item", line.id, "missing inventory item")
                continue
            items.append(InvoiceItemWithInventory.model_validate(line))

        return InvoiceWithItems(
            **InvoiceResponse.model_validate(invoice).model_dump(),
            client=ClientResponse.model_validate(invoice.client),
            items=items,
        )

    def resolve_invoices(self, invoices: List[Invoice]) -> List[InvoiceWithItems]:
        resolved = (self.resolve_invoice(invoice) for invoice in invoices)
        return [invoice for invoice in resolved if invoice is not None]
