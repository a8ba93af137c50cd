from datetime import datetime, timedelta
from decimal import Decimal
import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from solarflow.core.database import Base, get_db, init_db
from solarflow.core.security import create_access_token, get_password_hash
from solarflow.main import app
from solarflow.models import (
    User, Client, Approval, Task, Inventory, StockRequest, Invoice, InvoiceItem
)

PASSWORD = "password123"
_password_hash = None


def password_hash():
    # bcrypt is slow on purpose; hash the shared test password once
    global _password_hash
    if _password_hash is None:
        _password_hash = get_password_hash(PASSWORD)
    return _password_hash


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory database with one admin and two agents per test"""

    def setUp(self):
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        init_db(bind=self.engine)
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db = self.Session()

        self.admin = self.make_user("John Smith", "admin@solarflow.com", "admin")
        self.agent = self.make_user("Priya Singh", "priya@solarflow.com", "agent")
        self.other_agent = self.make_user("Rohit Sharma", "rohit@solarflow.com", "agent")

    def tearDown(self):
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def _save(self, row):
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def make_user(self, name, email, role):
        return self._save(User(name=name, email=email, role=role, hashed_password=password_hash()))

    def make_client(self, name="Asha Rao", agent=None, status="lead", created_at=None, **kwargs):
        return self._save(Client(
            name=name,
            phone=kwargs.pop("phone", "9876543210"),
            address=kwargs.pop("address", "12 MG Road, Pune"),
            assigned_agent_id=agent.id if agent else kwargs.pop("assigned_agent_id", None),
            project_status=status,
            created_at=created_at or datetime.utcnow(),
            **kwargs
        ))

    def make_approval(self, client_id, step="application", status="pending"):
        return self._save(Approval(client_id=client_id, step=step, status=status))

    def make_task(self, client_id, agent_id, title="Site survey", due_date=None, status="pending", created_at=None):
        return self._save(Task(
            client_id=client_id,
            assigned_agent_id=agent_id,
            title=title,
            due_date=due_date,
            status=status,
            created_at=created_at or datetime.utcnow(),
        ))

    def make_inventory(self, item_name="Solar Panel (320W)", quantity=25, threshold=50, unit_price="15000.00"):
        return self._save(Inventory(
            item_name=item_name,
            quantity=quantity,
            threshold=threshold,
            unit_price=Decimal(unit_price) if unit_price is not None else None,
        ))

    def make_stock_request(self, agent_id, item_id, quantity=5, status="pending", approved_by=None):
        return self._save(StockRequest(
            agent_id=agent_id,
            item_id=item_id,
            quantity_requested=quantity,
            status=status,
            approved_by=approved_by,
        ))

    def make_invoice(self, client_id, number, total="100000.00", status="pending", created_at=None, items=()):
        invoice = self._save(Invoice(
            client_id=client_id,
            invoice_number=number,
            total_amount=Decimal(total),
            amount_paid=Decimal("0.00"),
            due_date=datetime.utcnow() + timedelta(days=30),
            status=status,
            created_at=created_at or datetime.utcnow(),
        ))
        for item_id, quantity, unit_price in items:
            self._save(InvoiceItem(
                invoice_id=invoice.id,
                item_id=item_id,
                quantity=quantity,
                unit_price=Decimal(unit_price),
                total_price=Decimal(unit_price) * quantity,
            ))
        return invoice


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase with a TestClient bound to the same database"""

    def setUp(self):
        super().setUp()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        super().tearDown()

    def auth(self, user):
        token = create_access_token({"sub": user.id, "role": user.role})
        return {"Authorization": f"Bearer {token}"}
