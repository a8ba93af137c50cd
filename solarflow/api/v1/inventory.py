"""
Inventory API Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from solarflow.core.database import get_db
from solarflow.core.security import get_current_user
from solarflow.schemas import InventoryCreate, InventoryUpdate, InventoryResponse
from solarflow.services.inventory_service import InventoryService

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[InventoryResponse])
async def list_inventory(db: Session = Depends(get_db)):
    """List all inventory items"""
    return InventoryService(db).get_all()


@router.get("/low-stock", response_model=List[InventoryResponse])
async def list_low_stock(db: Session = Depends(get_db)):
    """List items at or below their threshold"""
    return InventoryService(db).get_low_stock()


@router.post("", response_model=InventoryResponse, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    item_data: InventoryCreate,
    db: Session = Depends(get_db)
):
    """Create a new inventory item"""
    item = InventoryService(db).create(item_data)
    db.commit()
    db.refresh(item)
    return item


@router.put("/{item_id}", response_model=InventoryResponse)
async def update_inventory_item(
    item_id: str,
    item_data: InventoryUpdate,
    db: Session = Depends(get_db)
):
    """Update inventory item"""
    item = InventoryService(db).update(item_id, item_data)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    db.commit()
    db.refresh(item)
    return item
