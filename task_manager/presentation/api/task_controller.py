"""Task API controller"""

from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from .dependencies import get_current_user, provide
from .schemas import (
    CreateTaskRequest, UpdateTaskRequest, TaskResponse, TaskSummaryResponse,
    parse_category, to_summaries
)
from ...application.use_cases.task_use_cases import (
    CreateTaskUseCase, GetTaskByIdUseCase, GetTasksByUserUseCase,
    GetTasksByCategoryUseCase, GetTasksByUserAndCategoryUseCase,
    UpdateTaskUseCase, DeleteTaskUseCase, MarkTaskAsCompletedUseCase
)
from ...domain.entities.task import Category
from ...domain.entities.user import User
from ...domain.exceptions import TaskNotFoundError, TaskValidationError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/task", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    request: CreateTaskRequest,
    current_user: User = Depends(get_current_user),
    use_case: CreateTaskUseCase = Depends(provide(CreateTaskUseCase))
):
    """Create a task owned by the caller"""
    try:
        task = await use_case.execute(
            title=request.title,
            description=request.description,
            due_date=request.due_date,
            created_by_user_id=current_user.id,
            category=parse_category(request.category),
            priority=request.priority
        )
    except TaskValidationError as e:
        logger.warning(f"Task creation rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TaskResponse.from_entity(task)


@router.get("", response_model=List[TaskSummaryResponse])
async def get_my_tasks(
    current_user: User = Depends(get_current_user),
    use_case: GetTasksByUserUseCase = Depends(provide(GetTasksByUserUseCase))
):
    """List the caller's tasks"""
    tasks = await use_case.execute(current_user.id)
    return to_summaries(tasks)


@router.get("/category/{category}", response_model=List[TaskSummaryResponse])
async def get_tasks_by_category(
    category: str,
    current_user: User = Depends(get_current_user),
    use_case: GetTasksByCategoryUseCase = Depends(provide(GetTasksByCategoryUseCase))
):
    """List tasks in a category across all users"""
    tasks = await use_case.execute(Category(name=category.strip()))
    return to_summaries(tasks)


@router.get("/user-category/{category}", response_model=List[TaskSummaryResponse])
async def get_my_tasks_by_category(
    category: str,
    current_user: User = Depends(get_current_user),
    use_case: GetTasksByUserAndCategoryUseCase = Depends(provide(GetTasksByUserAndCategoryUseCase))
):
    """List the caller's tasks in a category"""
    tasks = await use_case.execute(current_user.id, Category(name=category.strip()))
    return to_summaries(tasks)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    use_case: GetTaskByIdUseCase = Depends(provide(GetTaskByIdUseCase))
):
    task = await use_case.execute(task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TaskNotFoundError.default_message)
    return TaskResponse.from_entity(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    current_user: User = Depends(get_current_user),
    use_case: UpdateTaskUseCase = Depends(provide(UpdateTaskUseCase))
):
    """Apply a partial update to a task"""
    try:
        task = await use_case.execute(task_id, request.to_domain())
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TaskResponse.from_entity(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    use_case: DeleteTaskUseCase = Depends(provide(DeleteTaskUseCase))
):
    try:
        await use_case.execute(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    use_case: MarkTaskAsCompletedUseCase = Depends(provide(MarkTaskAsCompletedUseCase))
):
    """Mark a task as done"""
    try:
        task = await use_case.execute(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TaskResponse.from_entity(task)
