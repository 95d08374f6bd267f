from fastapi import APIRouter, Depends
from pydantic import BaseModel

from studypilot.auth import get_current_user
from studypilot.dependencies import get_workflow
from studypilot.routes import to_http
from studypilot.services.goal_workflow import GoalWorkflow

router = APIRouter(prefix="/api/v1", tags=["Plans"])


class DayRequest(BaseModel):
    day_number: int


class DayToggle(BaseModel):
    completed: bool


# ── Plans ─────────────────────────────────────────────────────────
@router.post("/goals/{goal_id}/plans", status_code=201)
async def generate_plan(goal_id: str, user_id: str = Depends(get_current_user),
                        workflow: GoalWorkflow = Depends(get_workflow)):
    """Generate a new plan. Regenerating adds a plan; the newest is current."""
    try:
        plan = await workflow.generate_plan(goal_id, owner_id=user_id)
        return {"status": "success", "data": plan}
    except Exception as e:
        raise to_http(e)


@router.get("/goals/{goal_id}/plans")
async def list_plans(goal_id: str, user_id: str = Depends(get_current_user),
                     workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        return workflow.list_plans(goal_id, owner_id=user_id)
    except Exception as e:
        raise to_http(e)


@router.get("/goals/{goal_id}/plans/current")
async def current_plan(goal_id: str, user_id: str = Depends(get_current_user),
                       workflow: GoalWorkflow = Depends(get_workflow)):
    """Latest plan, or null when none has been generated yet."""
    try:
        return workflow.current_plan(goal_id, owner_id=user_id)
    except Exception as e:
        raise to_http(e)


# ── Daily content ─────────────────────────────────────────────────
@router.post("/plans/{plan_id}/days", status_code=201)
async def generate_day(plan_id: str, body: DayRequest, user_id: str = Depends(get_current_user),
                       workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        content = await workflow.generate_daily_content(plan_id, body.day_number, owner_id=user_id)
        return {"status": "success", "data": content}
    except Exception as e:
        raise to_http(e)


@router.get("/plans/{plan_id}/days")
async def list_days(plan_id: str, user_id: str = Depends(get_current_user),
                    workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        return workflow.list_daily_content(plan_id, owner_id=user_id)
    except Exception as e:
        raise to_http(e)


@router.patch("/days/{content_id}")
async def toggle_day(content_id: str, body: DayToggle, user_id: str = Depends(get_current_user),
                     workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        content = workflow.toggle_day_completion(content_id, body.completed, owner_id=user_id)
        return {"status": "success", "data": content}
    except Exception as e:
        raise to_http(e)
