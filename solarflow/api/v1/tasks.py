"""
Task API Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from solarflow.core.database import get_db
from solarflow.core.security import Scope, get_scope
from solarflow.schemas import TaskCreate, TaskUpdate, TaskResponse, TaskWithClient, TaskStats
from solarflow.services.resolver import RelationshipResolver
from solarflow.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=List[TaskWithClient])
async def list_tasks(
    clientId: Optional[str] = None,
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """List tasks visible to the current user"""
    tasks = TaskService(db).get_all(scope.agent_id, clientId)
    return RelationshipResolver().resolve_tasks(tasks)


@router.get("/stats", response_model=TaskStats)
async def get_task_stats(
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Task counts by status for the current user"""
    task_service = TaskService(db)
    tasks = RelationshipResolver().resolve_tasks(task_service.get_all(scope.agent_id))
    return task_service.get_stats(tasks)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Create a new task"""
    task = TaskService(db).create(task_data)
    db.commit()
    db.refresh(task)
    return task


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Update task, e.g. toggle pending / completed"""
    task = TaskService(db).update(task_id, task_data, scope.agent_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    db.commit()
    db.refresh(task)
    return task
