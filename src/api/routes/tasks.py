"""
Task management endpoints.

Every write re-syncs the task's reminder after the database commit.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_task_use_case
from src.application.dto.requests import CreateTaskRequest, UpdateTaskRequest
from src.application.dto.responses import ErrorResponse, TaskListResponse, TaskResponse
from src.application.use_cases import ManageTasksUseCase

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_task(
    request: CreateTaskRequest,
    use_case: ManageTasksUseCase = Depends(get_task_use_case),
) -> TaskResponse:
    """Create a task and schedule its reminder."""
    task = await use_case.create(request)
    return TaskResponse.from_entity(task)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    include_completed: bool = True,
    use_case: ManageTasksUseCase = Depends(get_task_use_case),
) -> TaskListResponse:
    """List tasks, newest first."""
    tasks = await use_case.list_all(include_completed=include_completed)
    return TaskListResponse(
        tasks=[TaskResponse.from_entity(t) for t in tasks],
        total=len(tasks),
    )


@router.get("/{task_id}", response_model=TaskResponse, responses=NOT_FOUND)
async def get_task(
    task_id: str,
    use_case: ManageTasksUseCase = Depends(get_task_use_case),
) -> TaskResponse:
    return TaskResponse.from_entity(await use_case.get(task_id))


@router.put("/{task_id}", response_model=TaskResponse, responses=NOT_FOUND)
async def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    use_case: ManageTasksUseCase = Depends(get_task_use_case),
) -> TaskResponse:
    """Update task fields; the reminder is cancelled and recomputed."""
    task = await use_case.update(task_id, request)
    return TaskResponse.from_entity(task)


@router.post("/{task_id}/toggle", response_model=TaskResponse, responses=NOT_FOUND)
async def toggle_task(
    task_id: str,
    use_case: ManageTasksUseCase = Depends(get_task_use_case),
) -> TaskResponse:
    """Flip completion status."""
    task = await use_case.toggle_status(task_id)
    return TaskResponse.from_entity(task)


@router.post("/{task_id}/restore", response_model=TaskResponse, responses=NOT_FOUND)
async def restore_task(
    task_id: str,
    use_case: ManageTasksUseCase = Depends(get_task_use_case),
) -> TaskResponse:
    """Reopen an archived task with its due date reset to now."""
    task = await use_case.restore(task_id)
    return TaskResponse.from_entity(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_task(
    task_id: str,
    use_case: ManageTasksUseCase = Depends(get_task_use_case),
) -> None:
    """Delete a task and cancel its reminder."""
    await use_case.delete(task_id)
