from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from ..errors import StorageUnavailable
from ..schemas.task import ErrorResponse, Task as TaskSchema, TaskCreate
from ..services import TaskService

router = APIRouter()


def get_task_service(request: Request) -> TaskService:
    """Dependency to get a task service bound to the app's database."""
    return TaskService(request.app.state.database)


def _storage_error(request: Request, exc: StorageUnavailable, message: str) -> JSONResponse:
    if request.app.state.expose_error_details:
        message = exc.message
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


@router.get(
    "/tasks",
    response_model=List[TaskSchema],
    responses={500: {"model": ErrorResponse}},
)
def get_tasks(request: Request, service: TaskService = Depends(get_task_service)):
    """Get all tasks, newest first."""
    try:
        return service.list_tasks()
    except StorageUnavailable as e:
        return _storage_error(request, e, "Failed to fetch tasks")


@router.post(
    "/tasks",
    response_model=TaskSchema,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_task(
    request: Request,
    task: TaskCreate,
    service: TaskService = Depends(get_task_service),
):
    """Create a new task."""
    try:
        return service.create_task(title=task.title, description=task.description)
    except StorageUnavailable as e:
        return _storage_error(request, e, "Failed to create task")
