"""
Task Service - Client follow-ups and reminders
"""
from typing import Optional, List
from sqlalchemy.orm import Session, joinedload
from solarflow.core.formatting import is_overdue
from solarflow.models import Task, TaskStatus
from solarflow.schemas import TaskCreate, TaskUpdate, TaskStats, TaskWithClient


class TaskService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self, agent_id: Optional[str] = None):
        query = self.db.query(Task).options(
            joinedload(Task.client),
            joinedload(Task.assigned_agent)
        )
        if agent_id:
            query = query.filter(Task.assigned_agent_id == agent_id)
        return query

    def get_by_id(self, task_id: str, agent_id: Optional[str] = None) -> Optional[Task]:
        return self._query(agent_id).filter(Task.id == task_id).first()

    def get_all(self, agent_id: Optional[str] = None, client_id: Optional[str] = None) -> List[Task]:
        query = self._query(agent_id)
        if client_id:
            query = query.filter(Task.client_id == client_id)
        return query.order_by(Task.created_at).all()

    def create(self, task_data: TaskCreate) -> Task:
        task = Task(
            client_id=task_data.client_id,
            assigned_agent_id=task_data.assigned_agent_id,
            title=task_data.title,
            description=task_data.description,
            due_date=task_data.due_date,
            status=task_data.status.value
        )
        self.db.add(task)
        self.db.flush()
        return task

    def update(self, task_id: str, task_data: TaskUpdate, agent_id: Optional[str] = None) -> Optional[Task]:
        task = self.get_by_id(task_id, agent_id)
        if not task:
            return None

        update_data = task_data.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            if key == "status" and value is not None:
                value = value.value
            setattr(task, key, value)

        self.db.flush()
        return task

    @staticmethod
    def get_stats(tasks: List[TaskWithClient]) -> TaskStats:
        """Counts by status over an already resolved task list"""
        return TaskStats(
            total=len(tasks),
            pending=sum(1 for t in tasks if t.status == TaskStatus.PENDING.value),
            completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED.value),
            overdue=sum(1 for t in tasks if is_overdue(t.due_date)),
        )
