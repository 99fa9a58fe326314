"""Task management routes for the Taskboard API."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from taskboard.api.gateway import create_current_user_dependency
from taskboard.c2_task_service.task_service import TaskUpdate

logger = logging.getLogger(__name__)


# Request/Response Models
class CreateTaskRequest(BaseModel):
    """Request model for creating a task."""

    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="What needs to be done")
    assignedUserId: Optional[str] = Field(None, description="User the task is assigned to")


class UpdateTaskStatusRequest(BaseModel):
    """Request model for updating task status."""

    status: Optional[str] = Field(None, description="Pending or Completed")


class UpdateTaskRequest(BaseModel):
    """Request model for editing a task. Unknown fields are dropped."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, description="New title")
    description: Optional[str] = Field(None, description="New description")


class AssigneeResponse(BaseModel):
    id: str
    name: str
    email: str


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    status: str
    assignedUserId: Optional[AssigneeResponse]
    createdAt: str
    updatedAt: str


class TaskEnvelope(BaseModel):
    message: str
    task: TaskResponse


class MessageResponse(BaseModel):
    message: str


def create_task_router(server_state):
    """Create task router with server_state dependency.

    Every route requires a valid bearer token.

    Args:
        server_state: ServerState instance with task_service and auth_service

    Returns:
        APIRouter: Configured router with task endpoints
    """
    get_current_user_id = create_current_user_dependency(server_state)
    router = APIRouter(
        prefix="/tasks",
        tags=["tasks"],
        dependencies=[Depends(get_current_user_id)],
    )

    @router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
    def create_task(
        request: CreateTaskRequest,
        user_id: str = Depends(get_current_user_id),
    ) -> Dict[str, Any]:
        """Create a task assigned to a user. Status starts as Pending."""
        task = server_state.task_service.create(
            title=request.title,
            description=request.description,
            assigned_user_id=request.assignedUserId,
            requester_id=user_id,
        )
        return {"message": "Task created successfully", "task": task}

    @router.get("", response_model=List[TaskResponse])
    def list_tasks() -> List[Dict[str, Any]]:
        """All tasks, newest first."""
        return server_state.task_service.list_all()

    @router.get("/user/{assigned_user_id}", response_model=List[TaskResponse])
    def list_tasks_for_user(assigned_user_id: str) -> List[Dict[str, Any]]:
        """Tasks assigned to one user, newest first."""
        return server_state.task_service.list_by_user(assigned_user_id)

    @router.get("/my-tasks", response_model=List[TaskResponse])
    def list_my_tasks(user_id: str = Depends(get_current_user_id)) -> List[Dict[str, Any]]:
        """Tasks assigned to the authenticated user, newest first."""
        return server_state.task_service.list_mine(user_id)

    @router.patch("/{task_id}/status", response_model=TaskEnvelope)
    def update_task_status(
        task_id: str,
        request: UpdateTaskStatusRequest,
        user_id: str = Depends(get_current_user_id),
    ) -> Dict[str, Any]:
        """Set a task's status to the value sent."""
        task = server_state.task_service.update_status(
            task_id, request.status, requester_id=user_id
        )
        return {"message": "Task status updated successfully", "task": task}

    @router.put("/{task_id}", response_model=TaskEnvelope)
    def update_task(
        task_id: str,
        request: UpdateTaskRequest,
        user_id: str = Depends(get_current_user_id),
    ) -> Dict[str, Any]:
        """Edit a task's title and/or description."""
        changes = TaskUpdate(title=request.title, description=request.description)
        task = server_state.task_service.update(task_id, changes, requester_id=user_id)
        return {"message": "Task updated successfully", "task": task}

    @router.delete("/{task_id}", response_model=MessageResponse)
    def delete_task(
        task_id: str,
        user_id: str = Depends(get_current_user_id),
    ) -> Dict[str, str]:
        """Delete a task permanently."""
        return server_state.task_service.delete(task_id, requester_id=user_id)

    return router
