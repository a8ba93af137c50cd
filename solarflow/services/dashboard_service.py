"""
Dashboard Service - Pipeline, stock and revenue metrics
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session

from solarflow.core.formatting import round_half_up, format_lakhs, is_low_stock
from solarflow.core.security import Scope
from solarflow.models import (
    ProjectStatus, ApprovalStatus, TaskStatus, InvoiceStatus, APPROVAL_STEPS
)
from solarflow.schemas import (
    DashboardMetrics, PipelineStep, LowStockItem, InvoiceWithItems, TaskWithClient
)
from solarflow.services.approval_service import ApprovalService
from solarflow.services.client_service import ClientService
from solarflow.services.inventory_service import InventoryService
from solarflow.services.invoice_service import InvoiceService
from solarflow.services.resolver import RelationshipResolver
from solarflow.services.task_service import TaskService

RECENT_CLIENTS_LIMIT = 5
PENDING_TASKS_LIMIT = 10


def sort_by_due_date(tasks: List[TaskWithClient]) -> List[TaskWithClient]:
    """Order tasks by due date, earliest first.

    Tasks without a due date are not reordered: they keep the position they
    had in the fetched list and dated tasks are sorted into the remaining
    positions.
    """
    dated_slots = [i for i, task in enumerate(tasks) if task.due_date is not None]
    dated = sorted((tasks[i] for i in dated_slots), key=lambda task: task.due_date)
    ordered = list(tasks)
    for slot, task in zip(dated_slots, dated):
        ordered[slot] = task
    return ordered


def monthly_revenue(invoices: List[InvoiceWithItems], today: Optional[datetime] = None) -> Decimal:
    """Total of paid invoices created in the current calendar month.

    Both month and year must match, so the same month of an earlier year is
    not counted.
    """
    today = today or datetime.utcnow()
    return sum(
        (
            invoice.total_amount for invoice in invoices
            if invoice.status == InvoiceStatus.PAID.value
            and invoice.created_at.year == today.year
            and invoice.created_at.month == today.month
        ),
        Decimal("0")
    )


def pipeline_percentage(count: int, total_clients: int) -> int:
    if total_clients <= 0:
        return 0
    return round_half_up(count * 100 / total_clients)


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.resolver = RelationshipResolver()

    def get_metrics(self, scope: Scope) -> DashboardMetrics:
        """Compute the dashboard summary for the caller's scope.

        Clients and tasks follow the caller's scope; approvals, inventory and
        invoices are counted across the whole business.
        """
        clients = self.resolver.resolve_clients(
            ClientService(self.db).get_all(scope.agent_id)
        )
        tasks = self.resolver.resolve_tasks(
            TaskService(self.db).get_all(scope.agent_id)
        )
        approvals = ApprovalService(self.db).get_all()
        inventory = InventoryService(self.db).get_all()
        invoices = self.resolver.resolve_invoices(
            InvoiceService(self.db).get_all()
        )

        total_clients = len(clients)
        active_projects = sum(
            1 for c in clients if c.project_status == ProjectStatus.IN_PROGRESS.value
        )
        pending_approvals = sum(
            1 for a in approvals if a.status == ApprovalStatus.PENDING.value
        )

        # Raw row count per step, regardless of status or owning client
        approval_pipeline = []
        for step in APPROVAL_STEPS:
            count = sum(1 for a in approvals if a.step == step)
            approval_pipeline.append(PipelineStep(
                step=step,
                count=count,
                percentage=pipeline_percentage(count, total_clients)
            ))

        low_stock_items = [
            LowStockItem.model_validate(item)
            for item in inventory
            if is_low_stock(item.quantity, item.threshold)
        ]

        recent_clients = sorted(clients, key=lambda c: c.created_at, reverse=True)[:RECENT_CLIENTS_LIMIT]

        pending_tasks = sort_by_due_date(
            [t for t in tasks if t.status == TaskStatus.PENDING.value]
        )[:PENDING_TASKS_LIMIT]

        return DashboardMetrics(
            total_clients=total_clients,
            active_projects=active_projects,
            pending_approvals=pending_approvals,
            monthly_revenue=format_lakhs(monthly_revenue(invoices)),
            approval_pipeline=approval_pipeline,
            low_stock_items=low_stock_items,
            recent_clients=recent_clients,
            pending_tasks=pending_tasks
        )
