"""Task service

Toutes les opérations reçoivent explicitement l'id de l'appelant (caller_id).
Une tâche qui n'existe pas et une tâche qui appartient à un autre
utilisateur donnent le même résultat (None / False).
"""

import logging
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional, Tuple

from taskapi.models.task import Task, TaskPriority, TaskStatus
from taskapi.repositories.task_repository import TaskRepository
from taskapi.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def _owned_task(repo: TaskRepository, task_id: int, caller_id: int) -> Optional[Task]:
    task = repo.get_by_id(task_id)
    if task is None or task.user_id != caller_id:
        return None
    return task


def create_task(db: Session, task_data: TaskCreate, caller_id: int) -> Task:
    new_task = Task(
        user_id=caller_id,
        title=task_data.title,
        description=task_data.description,
        due_date=task_data.due_date,
        priority=int(task_data.priority),
        status=int(TaskStatus.PENDING),
        created_at=datetime.utcnow(),
    )
    TaskRepository(db).add(new_task)
    logger.info(f"Task {new_task.id} created for user {caller_id}")
    return new_task


def get_task_by_id(db: Session, task_id: int, caller_id: int) -> Optional[Task]:
    return _owned_task(TaskRepository(db), task_id, caller_id)


def list_tasks(db: Session, caller_id: int) -> List[Task]:
    return TaskRepository(db).list_all(user_id=caller_id)


def list_filtered_tasks(
    db: Session,
    caller_id: int,
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    page_number: int = 1,
    page_size: int = 10,
) -> Tuple[List[Task], int]:
    # le filtre propriétaire est appliqué avant la pagination, sinon le total est faux
    return TaskRepository(db).list_page(
        page_number,
        page_size,
        user_id=caller_id,
        status=status,
        priority=priority,
    )


def update_task(db: Session, task_id: int, task_data: TaskUpdate, caller_id: int) -> Optional[Task]:
    repo = TaskRepository(db)
    task = _owned_task(repo, task_id, caller_id)
    if task is None:
        return None

    provided = task_data.model_fields_set

    if task_data.title:
        task.title = task_data.title
    # description envoyée (même null ou vide) => on l'applique, ce qui permet de l'effacer
    if "description" in provided:
        task.description = task_data.description
    if task_data.due_date is not None:
        task.due_date = task_data.due_date
    if task_data.priority is not None:
        task.priority = int(task_data.priority)
    if task_data.status is not None:
        task.status = int(task_data.status)

    task.updated_at = datetime.utcnow()
    return repo.save(task)


def delete_task(db: Session, task_id: int, caller_id: int) -> bool:
    repo = TaskRepository(db)
    task = _owned_task(repo, task_id, caller_id)
    if task is None:
        return False

    repo.delete(task)
    logger.info(f"Task {task_id} deleted by user {caller_id}")
    return True
