# api/endpoints/tasks.py
from fastapi import APIRouter, Depends, status

from taskapi.api.deps import get_app_settings, get_task_repository
from taskapi.api.responses import success
from taskapi.db import TaskRepository
from taskapi.errors import TaskNotFound
from taskapi.schemas import TaskCreate, TaskCreated, TaskUpdate

router = APIRouter()


@router.get("")
async def list_tasks(repo: TaskRepository = Depends(get_task_repository)):
    return success(await repo.list_tasks())


@router.get("/{task_id}")
async def get_task(task_id: int, repo: TaskRepository = Depends(get_task_repository)):
    task = await repo.get_task(task_id)
    if task is None:
        raise TaskNotFound(task_id)
    return success(task)


@router.post("")
async def create_task(task: TaskCreate, repo: TaskRepository = Depends(get_task_repository)):
    task_id = await repo.create_task(task.name, task.priority)
    return success(TaskCreated(task_id=task_id), status_code=status.HTTP_201_CREATED)


@router.patch("/{task_id}")
async def update_task(
        task_id: int,
        task: TaskUpdate,
        repo: TaskRepository = Depends(get_task_repository),
        settings=Depends(get_app_settings),
):
    """
    Only the fields present in the body are written. By default an id that
    matches no row still reports success.
    """
    changes = task.changes()
    if changes:
        missing = await repo.update_task(task_id, changes) == 0
    else:
        missing = settings.REPORT_MISSING_ON_UPDATE and await repo.get_task(task_id) is None

    if missing and settings.REPORT_MISSING_ON_UPDATE:
        raise TaskNotFound(task_id)
    return success()


@router.delete("/{task_id}")
async def delete_task(task_id: int, repo: TaskRepository = Depends(get_task_repository)):
    # Idempotent: deleting an absent task is not an error
    await repo.delete_task(task_id)
    return success()
