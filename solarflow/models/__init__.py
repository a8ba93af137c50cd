"""
SQLAlchemy Models for SolarFlow
"""
from datetime import datetime
from decimal import Decimal
import enum
import uuid

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Numeric, ForeignKey, Index
)
from sqlalchemy.orm import relationship

from solarflow.core.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


# ==================== ENUMS ====================

class UserRole(enum.Enum):
    ADMIN = "admin"
    AGENT = "agent"


class ProjectStatus(enum.Enum):
    LEAD = "lead"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class ApprovalStep(enum.Enum):
    APPLICATION = "application"
    VERIFICATION = "verification"
    INSPECTION = "inspection"
    NOC = "noc"
    CLEARANCE = "clearance"


class ApprovalStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TaskStatus(enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class StockRequestStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class InvoiceStatus(enum.Enum):
    PAID = "paid"
    PARTIAL = "partial"
    PENDING = "pending"


# Pipeline order used by the dashboard and progress calculations
APPROVAL_STEPS = [step.value for step in ApprovalStep]


# ==================== CORE MODELS ====================

class User(Base):
    """User account (admin or field agent)"""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.AGENT.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class Client(Base):
    """Solar installation customer"""
    __tablename__ = 'clients'

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=False)
    address = Column(Text, nullable=False)
    assigned_agent_id = Column(String(36), ForeignKey('users.id'), nullable=True)
    project_status = Column(String(20), nullable=False, default=ProjectStatus.LEAD.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    assigned_agent = relationship("User", foreign_keys=[assigned_agent_id])
    approvals = relationship("Approval", back_populates="client", order_by="Approval.updated_at")
    tasks = relationship("Task", back_populates="client", order_by="Task.created_at")

    __table_args__ = (
        Index('ix_clients_assigned_agent_id', 'assigned_agent_id'),
    )


class Approval(Base):
    """One step of the government approval pipeline for a client"""
    __tablename__ = 'approvals'

    id = Column(String(36), primary_key=True, default=generate_id)
    client_id = Column(String(36), ForeignKey('clients.id'), nullable=False)
    step = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=ApprovalStatus.PENDING.value)
    remarks = Column(Text, nullable=True)
    document_url = Column(String(500), nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="approvals")

    __table_args__ = (
        Index('ix_approvals_client_id', 'client_id'),
    )


class Task(Base):
    """Follow-up task or reminder for a client"""
    __tablename__ = 'tasks'

    id = Column(String(36), primary_key=True, default=generate_id)
    client_id = Column(String(36), ForeignKey('clients.id'), nullable=False)
    assigned_agent_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="tasks")
    assigned_agent = relationship("User", foreign_keys=[assigned_agent_id])

    __table_args__ = (
        Index('ix_tasks_assigned_agent_id', 'assigned_agent_id'),
        Index('ix_tasks_client_id', 'client_id'),
    )


# ==================== INVENTORY MODELS ====================

class Inventory(Base):
    """Stock item (panels, inverters, batteries, ...)"""
    __tablename__ = 'inventory'

    id = Column(String(36), primary_key=True, default=generate_id)
    item_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    quantity = Column(Integer, nullable=False, default=0)
    threshold = Column(Integer, nullable=False, default=10)
    unit_price = Column(Numeric(10, 2), nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class StockRequest(Base):
    """Agent request for inventory, resolved by an admin"""
    __tablename__ = 'stock_requests'

    id = Column(String(36), primary_key=True, default=generate_id)
    agent_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    item_id = Column(String(36), ForeignKey('inventory.id'), nullable=False)
    quantity_requested = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=StockRequestStatus.PENDING.value)
    reason = Column(Text, nullable=True)
    approved_by = Column(String(36), ForeignKey('users.id'), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    agent = relationship("User", foreign_keys=[agent_id])
    item = relationship("Inventory")
    approved_by_user = relationship("User", foreign_keys=[approved_by])

    __table_args__ = (
        Index('ix_stock_requests_agent_id', 'agent_id'),
    )


# ==================== FINANCE MODELS ====================

class Invoice(Base):
    """Client invoice"""
    __tablename__ = 'invoices'

    id = Column(String(36), primary_key=True, default=generate_id)
    client_id = Column(String(36), ForeignKey('clients.id'), nullable=False)
    invoice_number = Column(String(50), nullable=False, unique=True)
    total_amount = Column(Numeric(12, 2), nullable=False)
    amount_paid = Column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    due_date = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default=InvoiceStatus.PENDING.value)
    pdf_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    client = relationship("Client")
    items = relationship("InvoiceItem", back_populates="invoice")

    __table_args__ = (
        Index('ix_invoices_client_id', 'client_id'),
    )


class InvoiceItem(Base):
    """Invoice line item"""
    __tablename__ = 'invoice_items'

    id = Column(String(36), primary_key=True, default=generate_id)
    invoice_id = Column(String(36), ForeignKey('invoices.id'), nullable=False)
    item_id = Column(String(36), ForeignKey('inventory.id'), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")
    item = relationship("Inventory")
