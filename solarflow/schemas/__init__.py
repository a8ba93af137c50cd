"""
Pydantic Schemas for API Validation

Field names are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, EmailStr, Field, ConfigDict, AfterValidator, computed_field, field_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Optional
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from solarflow.core import formatting


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


NaiveUTCDatetime = Annotated[datetime, AfterValidator(_to_naive_utc)]


def _reject_null(value):
    # Partial updates may omit a required column but never clear it
    if value is None:
        raise ValueError("Field may not be null")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ==================== ENUMS ====================

class UserRoleEnum(str, Enum):
    ADMIN = "admin"
    AGENT = "agent"


class ProjectStatusEnum(str, Enum):
    LEAD = "lead"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class ApprovalStepEnum(str, Enum):
    APPLICATION = "application"
    VERIFICATION = "verification"
    INSPECTION = "inspection"
    NOC = "noc"
    CLEARANCE = "clearance"


class ApprovalStatusEnum(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TaskStatusEnum(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class StockRequestStatusEnum(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class InvoiceStatusEnum(str, Enum):
    PAID = "paid"
    PARTIAL = "partial"
    PENDING = "pending"


# ==================== AUTH & USER SCHEMAS ====================

class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRoleEnum = UserRoleEnum.AGENT


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime


class AgentResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str


class LoginResponse(CamelModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


# ==================== APPROVAL SCHEMAS ====================

class ApprovalCreate(CamelModel):
    client_id: str
    step: ApprovalStepEnum
    status: ApprovalStatusEnum = ApprovalStatusEnum.PENDING
    remarks: Optional[str] = None
    document_url: Optional[str] = None


class ApprovalUpdate(CamelModel):
    client_id: Optional[str] = None
    step: Optional[ApprovalStepEnum] = None
    status: Optional[ApprovalStatusEnum] = None
    remarks: Optional[str] = None
    document_url: Optional[str] = None

    @field_validator("client_id", "step", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class ApprovalResponse(CamelModel):
    id: str
    client_id: str
    step: str
    status: str
    remarks: Optional[str] = None
    document_url: Optional[str] = None
    updated_at: datetime


class ApprovalProgress(CamelModel):
    client_id: str
    completed_steps: int
    total_steps: int
    percentage: int


# ==================== TASK SCHEMAS ====================

class TaskCreate(CamelModel):
    client_id: str
    assigned_agent_id: str
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: Optional[NaiveUTCDatetime] = None
    status: TaskStatusEnum = TaskStatusEnum.PENDING


class TaskUpdate(CamelModel):
    client_id: Optional[str] = None
    assigned_agent_id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: Optional[NaiveUTCDatetime] = None
    status: Optional[TaskStatusEnum] = None

    @field_validator("client_id", "assigned_agent_id", "title", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class TaskResponse(CamelModel):
    id: str
    client_id: str
    assigned_agent_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: str
    created_at: datetime

    @computed_field(alias="isOverdue")
    @property
    def is_overdue(self) -> bool:
        return formatting.is_overdue(self.due_date)

    @computed_field(alias="dueDateText")
    @property
    def due_date_text(self) -> str:
        return formatting.due_date_text(self.due_date)


class TaskStats(CamelModel):
    total: int
    pending: int
    completed: int
    overdue: int


# ==================== CLIENT SCHEMAS ====================

class ClientCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = None
    phone: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1)
    assigned_agent_id: Optional[str] = None
    project_status: ProjectStatusEnum = ProjectStatusEnum.LEAD


class ClientUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    address: Optional[str] = Field(None, min_length=1)
    assigned_agent_id: Optional[str] = None
    project_status: Optional[ProjectStatusEnum] = None

    @field_validator("name", "phone", "address", "project_status", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class ClientResponse(CamelModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: str
    address: str
    assigned_agent_id: Optional[str] = None
    project_status: str
    created_at: datetime


class ClientWithAgent(ClientResponse):
    assigned_agent: Optional[UserResponse] = None
    approvals: List[ApprovalResponse] = []
    tasks: List[TaskResponse] = []


class TaskWithClient(TaskResponse):
    client: ClientResponse
    assigned_agent: UserResponse


# ==================== INVENTORY SCHEMAS ====================

class InventoryCreate(CamelModel):
    item_name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    quantity: int = 0
    threshold: int = 10
    unit_price: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)


class InventoryUpdate(CamelModel):
    item_name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    quantity: Optional[int] = None
    threshold: Optional[int] = None
    unit_price: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)

    @field_validator("item_name", "quantity", "threshold", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class InventoryResponse(CamelModel):
    id: str
    item_name: str
    description: Optional[str] = None
    quantity: int
    threshold: int
    unit_price: Optional[Decimal] = None
    updated_at: datetime

    @computed_field(alias="isLowStock")
    @property
    def is_low_stock(self) -> bool:
        return formatting.is_low_stock(self.quantity, self.threshold)

    @computed_field(alias="isCriticalStock")
    @property
    def is_critical_stock(self) -> bool:
        return formatting.is_critical_stock(self.quantity)

    @computed_field(alias="stockStatus")
    @property
    def stock_status(self) -> str:
        return formatting.stock_status(self.quantity, self.threshold)


class LowStockItem(InventoryResponse):
    is_low: bool = True


# ==================== STOCK REQUEST SCHEMAS ====================

class StockRequestCreate(CamelModel):
    agent_id: Optional[str] = None  # defaults to the caller
    item_id: str
    quantity_requested: int
    status: StockRequestStatusEnum = StockRequestStatusEnum.PENDING
    reason: Optional[str] = None
    approved_by: Optional[str] = None


class StockRequestUpdate(CamelModel):
    agent_id: Optional[str] = None
    item_id: Optional[str] = None
    quantity_requested: Optional[int] = None
    status: Optional[StockRequestStatusEnum] = None
    reason: Optional[str] = None
    approved_by: Optional[str] = None

    @field_validator("agent_id", "item_id", "quantity_requested", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class StockRequestResponse(CamelModel):
    id: str
    agent_id: str
    item_id: str
    quantity_requested: int
    status: str
    reason: Optional[str] = None
    approved_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class StockRequestWithDetails(StockRequestResponse):
    agent: UserResponse
    item: InventoryResponse
    approved_by_user: Optional[UserResponse] = None


# ==================== INVOICE SCHEMAS ====================

class InvoiceItemCreate(CamelModel):
    item_id: str
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    total_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class InvoiceItemResponse(CamelModel):
    id: str
    invoice_id: str
    item_id: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class InvoiceItemWithInventory(InvoiceItemResponse):
    item: InventoryResponse


class InvoiceCreate(CamelModel):
    client_id: str
    invoice_number: str = Field(..., min_length=1, max_length=50)
    total_amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    amount_paid: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    due_date: NaiveUTCDatetime
    status: InvoiceStatusEnum = InvoiceStatusEnum.PENDING
    pdf_url: Optional[str] = None
    items: List[InvoiceItemCreate] = []


class InvoiceResponse(CamelModel):
    id: str
    client_id: str
    invoice_number: str
    total_amount: Decimal
    amount_paid: Decimal
    due_date: datetime
    status: str
    pdf_url: Optional[str] = None
    created_at: datetime


class InvoiceWithLineItems(InvoiceResponse):
    items: List[InvoiceItemResponse] = []


class InvoiceWithItems(InvoiceResponse):
    client: ClientResponse
    items: List[InvoiceItemWithInventory] = []


# ==================== DASHBOARD SCHEMAS ====================

class PipelineStep(CamelModel):
    step: str
    count: int
    percentage: int


class DashboardMetrics(CamelModel):
    model_config = ConfigDict(frozen=True)

    total_clients: int
    active_projects: int
    pending_approvals: int
    monthly_revenue: str
    approval_pipeline: List[PipelineStep]
    low_stock_items: List[LowStockItem]
    recent_clients: List[ClientWithAgent]
    pending_tasks: List[TaskWithClient]
