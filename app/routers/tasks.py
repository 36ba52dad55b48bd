import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.task import Task
from app.models.user import User
from app.schemas.pagination import PaginatedTasks
from app.schemas.task import ActionResult, TaskCreate, TaskEnvelope, TaskOut, TaskUpdate
from app.utils.auth import get_current_admin, get_current_user
from app.utils.pagination import PageRequest, format_paginated_response, paginate
from app.utils.permissions import AccessPolicy

logger = logging.getLogger(__name__)

router = APIRouter()

# Largest id a 64-bit INTEGER column can hold
MAX_ID = 2 ** 63 - 1


def _id_in_range(value: int) -> bool:
    return 0 < value <= MAX_ID


def page_params(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
) -> PageRequest:
    return paginate(page=page, limit=limit, status=status, search=search)


def _task_query(db: Session):
    return db.query(Task).options(joinedload(Task.owner))


def _get_task_or_404(db: Session, task_id: int, current_user: User, action: str) -> Task:
    task = None
    if _id_in_range(task_id):
        task = _task_query(db).filter(Task.id == task_id).first()
    if not task:
        logger.warning(f"Task {task_id} not found for {action} (user {current_user.id})")
        raise HTTPException(status_code=404, detail="Task not found")

    if not AccessPolicy.can_modify_task(current_user, task):
        logger.warning(
            f"Unauthorized task {action} attempt: task={task_id} user={current_user.id} owner={task.user_id}"
        )
        raise HTTPException(
            status_code=403,
            detail=f"Forbidden - You don't have access to {action} this task",
        )
    return task


def _page_of_tasks(query, page_request: PageRequest) -> PaginatedTasks:
    query = page_request.apply(query)
    total = query.count()
    if total == 0 or page_request.skip >= total:
        # Past the last page: an empty page, without sending the offset to the database
        return format_paginated_response([], page_request.page, page_request.limit, total)
    tasks = page_request.fetch(query.options(joinedload(Task.owner)))
    return format_paginated_response(tasks, page_request.page, page_request.limit, total)


@router.get("/", response_model=PaginatedTasks)
def get_my_tasks(
    page_request: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        query = db.query(Task).filter(Task.user_id == current_user.id)
        result = _page_of_tasks(query, page_request)

        logger.info(
            f"Tasks retrieved for user {current_user.id}: page={page_request.page} "
            f"limit={page_request.limit} count={result.count} total={result.pagination.total_items} "
            f"status={page_request.status!r} search={page_request.search!r}"
        )
        return result

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving tasks for user {current_user.id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/dashboard", response_model=PaginatedTasks)
def get_all_tasks(
    page_request: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """All tasks across all users (admin only)"""
    try:
        result = _page_of_tasks(db.query(Task), page_request)

        logger.info(
            f"Dashboard tasks retrieved by admin {current_user.id}: page={page_request.page} "
            f"limit={page_request.limit} count={result.count} total={result.pagination.total_items} "
            f"status={page_request.status!r} search={page_request.search!r}"
        )
        return result

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving dashboard tasks: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{user_id}", response_model=PaginatedTasks)
def get_tasks_by_user(
    user_id: int,
    page_request: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Tasks owned by `user_id`, visible to that user and to admins"""
    if not AccessPolicy.can_view_user_tasks(current_user, user_id):
        logger.warning(
            f"Unauthorized task access attempt: requested_user={user_id} "
            f"user={current_user.id} role={current_user.role}"
        )
        raise HTTPException(status_code=403, detail="Forbidden - You can only view your own tasks")

    try:
        if _id_in_range(user_id):
            result = _page_of_tasks(db.query(Task).filter(Task.user_id == user_id), page_request)
        else:
            result = format_paginated_response([], page_request.page, page_request.limit, 0)

        if result.pagination.total_items == 0:
            logger.warning(f"No tasks found for user {user_id} (requested by {current_user.id})")
        else:
            logger.info(
                f"Tasks retrieved for user {user_id} by {current_user.id}: page={page_request.page} "
                f"limit={page_request.limit} count={result.count} total={result.pagination.total_items} "
                f"status={page_request.status!r} search={page_request.search!r}"
            )
        return result

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving tasks for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/create", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        db_task = Task(
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            status=task.status.value,
            user_id=current_user.id,
        )

        db.add(db_task)
        db.commit()
        db.refresh(db_task)

        logger.info(f"Task created: id={db_task.id} user={current_user.id} title={db_task.title!r}")
        return TaskEnvelope(
            message="Task created successfully",
            data=TaskOut.model_validate(db_task),
        )

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating task for user {current_user.id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = _get_task_or_404(db, task_id, current_user, "update")

        # Apply only the fields provided in the request
        update_data = task_update.changes()
        if "status" in update_data:
            update_data["status"] = update_data["status"].value
        for key, value in update_data.items():
            setattr(task, key, value)

        db.commit()
        db.refresh(task)

        logger.info(f"Task {task.id} updated by user {current_user.id}: fields={sorted(update_data)}")
        return TaskEnvelope(
            message="Task updated successfully",
            data=TaskOut.model_validate(task),
        )

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating task {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{task_id}", response_model=ActionResult)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = _get_task_or_404(db, task_id, current_user, "delete")

        title = task.title
        db.delete(task)
        db.commit()

        logger.info(f"Task {task_id} deleted by user {current_user.id}: title={title!r}")
        return ActionResult(message="Task deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting task {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
