import math
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from taskapi.core.database import get_db
from taskapi.core.deps import get_current_user_id
from taskapi.models.task import TaskPriority, TaskStatus
from taskapi.schemas.common import ApiResponse, success_response
from taskapi.schemas.task import TaskCreate, TaskUpdate, TaskResponse, TaskPage
from taskapi.services import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])

# l'offset (pageNumber - 1) * pageSize doit tenir dans un entier 64 bits
MAX_PAGE_VALUE = 2**31


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


@router.post("", response_model=ApiResponse[TaskResponse], status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    task = task_service.create_task(db, task_data, user_id)
    return success_response(TaskResponse.model_validate(task), "Task created successfully")


@router.get("", response_model=ApiResponse[List[TaskResponse]])
def list_tasks(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    tasks = task_service.list_tasks(db, user_id)
    return success_response([TaskResponse.model_validate(t) for t in tasks])


# déclarée avant /{task_id} pour ne pas être capturée par la route paramétrée
@router.get("/filter", response_model=ApiResponse[TaskPage])
def filter_tasks(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    status_filter: Optional[int] = Query(None, alias="status", ge=0, le=1),
    priority_filter: Optional[int] = Query(None, alias="priority", ge=0, le=2),
    page_number: int = Query(1, alias="pageNumber", ge=1, le=MAX_PAGE_VALUE),
    page_size: int = Query(10, alias="pageSize", ge=1, le=MAX_PAGE_VALUE),
):
    tasks, total_count = task_service.list_filtered_tasks(
        db,
        user_id,
        status=TaskStatus(status_filter) if status_filter is not None else None,
        priority=TaskPriority(priority_filter) if priority_filter is not None else None,
        page_number=page_number,
        page_size=page_size,
    )

    page = TaskPage(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        total_count=total_count,
        page_number=page_number,
        page_size=page_size,
        total_pages=math.ceil(total_count / page_size),
    )
    return success_response(page)


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse])
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    task = task_service.get_task_by_id(db, task_id, user_id)
    if not task:
        raise _not_found()

    return success_response(TaskResponse.model_validate(task))


@router.put("/{task_id}", response_model=ApiResponse[TaskResponse])
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    task = task_service.update_task(db, task_id, task_data, user_id)
    if not task:
        raise _not_found()

    return success_response(TaskResponse.model_validate(task), "Task updated successfully")


@router.delete("/{task_id}", response_model=ApiResponse)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id)
):
    if not task_service.delete_task(db, task_id, user_id):
        raise _not_found()

    return success_response(None, "Task deleted successfully")
