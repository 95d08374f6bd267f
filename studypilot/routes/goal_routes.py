from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional

from studypilot.auth import get_current_user
from studypilot.dependencies import get_workflow
from studypilot.routes import to_http
from studypilot.services.goal_workflow import GoalWorkflow

router = APIRouter(prefix="/api/v1/goals", tags=["Goals"])


class GoalCreate(BaseModel):
    title: str
    priority: Optional[str] = "medium"
    file_id: Optional[str] = None
    description: Optional[str] = None
    target_date: Optional[str] = None
    category: Optional[str] = None


class GoalUpdate(BaseModel):
    title: Optional[str] = None
    priority: Optional[str] = None
    description: Optional[str] = None
    target_date: Optional[str] = None
    category: Optional[str] = None


class GoalComplete(BaseModel):
    completed: bool = True


@router.get("")
async def list_goals(user_id: str = Depends(get_current_user), workflow: GoalWorkflow = Depends(get_workflow)):
    """Active goals, newest first."""
    try:
        return workflow.list_goals(user_id)
    except Exception as e:
        raise to_http(e)


@router.post("", status_code=201)
async def create_goal(goal_data: GoalCreate, user_id: str = Depends(get_current_user),
                      workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        goal = workflow.create_goal(
            user_id,
            goal_data.title,
            goal_data.priority or "medium",
            file_id=goal_data.file_id,
            description=goal_data.description,
            target_date=goal_data.target_date,
            category=goal_data.category,
        )
        return {"status": "success", "data": goal}
    except Exception as e:
        raise to_http(e)


@router.get("/{goal_id}")
async def get_goal(goal_id: str, user_id: str = Depends(get_current_user),
                   workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        return workflow.get_goal(goal_id, owner_id=user_id)
    except Exception as e:
        raise to_http(e)


@router.patch("/{goal_id}")
async def update_goal(goal_id: str, goal_data: GoalUpdate, user_id: str = Depends(get_current_user),
                      workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        goal = workflow.update_goal(goal_id, goal_data.model_dump(exclude_unset=True), owner_id=user_id)
        return {"status": "success", "data": goal}
    except Exception as e:
        raise to_http(e)


@router.post("/{goal_id}/complete")
async def complete_goal(goal_id: str, body: GoalComplete = GoalComplete(),
                        user_id: str = Depends(get_current_user),
                        workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        goal = workflow.complete_goal(goal_id, body.completed, owner_id=user_id)
        return {"status": "success", "data": goal}
    except Exception as e:
        raise to_http(e)


@router.get("/{goal_id}/state")
async def goal_state(goal_id: str, user_id: str = Depends(get_current_user),
                     workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        return workflow.goal_status(goal_id, owner_id=user_id)
    except Exception as e:
        raise to_http(e)


@router.get("/{goal_id}/progress")
async def goal_progress(goal_id: str, user_id: str = Depends(get_current_user),
                        workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        return workflow.goal_progress(goal_id, owner_id=user_id)
    except Exception as e:
        raise to_http(e)
