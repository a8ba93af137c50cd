"""
Seed data for a fresh database
"""
from decimal import Decimal
import logging
from sqlalchemy.orm import Session

from solarflow.models import User, Inventory, UserRole
from solarflow.core.security import get_password_hash

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    {"name": "John Smith", "email": "admin@solarflow.com", "role": UserRole.ADMIN.value},
    {"name": "Priya Singh", "email": "priya@solarflow.com", "role": UserRole.AGENT.value},
    {"name": "Rohit Sharma", "email": "rohit@solarflow.com", "role": UserRole.AGENT.value},
]

DEFAULT_INVENTORY = [
    {
        "item_name": "Solar Panel (320W)",
        "description": "High efficiency monocrystalline solar panel",
        "quantity": 25,
        "threshold": 50,
        "unit_price": Decimal("15000.00"),
    },
    {
        "item_name": "Inverter (5KW)",
        "description": "Grid-tie solar inverter",
        "quantity": 8,
        "threshold": 15,
        "unit_price": Decimal("45000.00"),
    },
    {
        "item_name": "Lithium Battery (100Ah)",
        "description": "Deep cycle lithium ion battery",
        "quantity": 12,
        "threshold": 20,
        "unit_price": Decimal("25000.00"),
    },
]


def seed_defaults(db: Session, password: str) -> bool:
    """Create default users and inventory when the database has no users.

    Returns True if anything was seeded.
    """
    if db.query(User).first() is not None:
        return False

    hashed_password = get_password_hash(password)
    for user_data in DEFAULT_USERS:
        db.add(User(hashed_password=hashed_password, **user_data))

    if db.query(Inventory).first() is None:
        for item_data in DEFAULT_INVENTORY:
            db.add(Inventory(**item_data))

    db.commit()
    logger.info(f"Seeded {len(DEFAULT_USERS)} users and default inventory")
    return True
