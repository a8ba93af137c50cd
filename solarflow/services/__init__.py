# Services Package
from solarflow.services.user_service import UserService
from solarflow.services.client_service import ClientService
from solarflow.services.approval_service import ApprovalService
from solarflow.services.task_service import TaskService
from solarflow.services.inventory_service import InventoryService
from solarflow.services.stock_request_service import StockRequestService
from solarflow.services.invoice_service import InvoiceService
from solarflow.services.resolver import RelationshipResolver, DroppedRow
from solarflow.services.dashboard_service import DashboardService
from solarflow.services.seed_service import seed_defaults

__all__ = [
    'UserService',
    'ClientService',
    'ApprovalService',
    'TaskService',
    'InventoryService',
    'StockRequestService',
    'InvoiceService',
    'RelationshipResolver',
    'DroppedRow',
    'DashboardService',
    'seed_defaults',
]
