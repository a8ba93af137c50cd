"""
Inventory Service - Stock items and low stock tracking
"""
from datetime import datetime
from typing import Optional, List
from sqlalchemy.orm import Session
from solarflow.models import Inventory
from solarflow.schemas import InventoryCreate, InventoryUpdate


class InventoryService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, item_id: str) -> Optional[Inventory]:
        return self.db.query(Inventory).filter(Inventory.id == item_id).first()

    def get_all(self) -> List[Inventory]:
        return self.db.query(Inventory).all()

    def get_low_stock(self) -> List[Inventory]:
        """Items at or below their reorder threshold"""
        return self.db.query(Inventory).filter(
            Inventory.quantity <= Inventory.threshold
        ).all()

    def create(self, item_data: InventoryCreate) -> Inventory:
        item = Inventory(
            item_name=item_data.item_name,
            description=item_data.description,
            quantity=item_data.quantity,
            threshold=item_data.threshold,
            unit_price=item_data.unit_price
        )
        self.db.add(item)
        self.db.flush()
        return item

    def update(self, item_id: str, item_data: InventoryUpdate) -> Optional[Inventory]:
        item = self.get_by_id(item_id)
        if not item:
            return None

        update_data = item_data.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(item, key, value)
        item.updated_at = datetime.utcnow()

        self.db.flush()
        return item
