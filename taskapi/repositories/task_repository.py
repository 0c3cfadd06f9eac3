from sqlalchemy.orm import Session, Query
from typing import List, Optional, Tuple

from taskapi.models.task import Task, TaskPriority, TaskStatus


class TaskRepository:
    """Accès aux tâches. Ne connaît pas la notion de propriétaire: le
    service passe user_id comme un critère de filtre comme un autre."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, task_id: int) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def _filtered(
        self,
        user_id: Optional[int] = None,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> Query:
        query = self.db.query(Task)
        if user_id is not None:
            query = query.filter(Task.user_id == user_id)
        if status is not None:
            query = query.filter(Task.status == int(status))
        if priority is not None:
            query = query.filter(Task.priority == int(priority))
        return query

    def list_all(self, user_id: Optional[int] = None) -> List[Task]:
        return self._filtered(user_id).order_by(Task.created_at.desc(), Task.id.desc()).all()

    def list_page(
        self,
        page_number: int,
        page_size: int,
        user_id: Optional[int] = None,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> Tuple[List[Task], int]:
        """Page (1-based) des tâches correspondantes + nombre total avant pagination"""
        query = self._filtered(user_id, status, priority)
        total_count = query.count()
        tasks = (
            query.order_by(Task.created_at.desc(), Task.id.desc())
            .offset((page_number - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return tasks, total_count

    def add(self, task: Task) -> Task:
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def save(self, task: Task) -> Task:
        self.db.commit()
        self.db.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        self.db.commit()
