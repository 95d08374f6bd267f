from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional

from studypilot.auth import get_current_user
from studypilot.dependencies import get_workflow
from studypilot.routes import to_http
from studypilot.services.goal_workflow import GoalWorkflow

router = APIRouter(prefix="/api/v1/profile", tags=["Profile"])


class ProfileCreate(BaseModel):
    display_name: Optional[str] = None


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    tokens: Optional[int] = None
    streak: Optional[int] = None


@router.get("")
async def get_profile(user_id: str = Depends(get_current_user), workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        return workflow.get_profile(user_id)
    except Exception as e:
        raise to_http(e)


@router.post("", status_code=201)
async def create_profile(body: ProfileCreate, user_id: str = Depends(get_current_user),
                         workflow: GoalWorkflow = Depends(get_workflow)):
    """Called once after sign-up by the identity provider."""
    try:
        profile = workflow.create_profile(user_id, body.display_name)
        return {"status": "success", "data": profile}
    except Exception as e:
        raise to_http(e)


@router.patch("")
async def update_profile(body: ProfileUpdate, user_id: str = Depends(get_current_user),
                         workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        profile = workflow.update_profile(user_id, **body.model_dump(exclude_unset=True))
        return {"status": "success", "data": profile}
    except Exception as e:
        raise to_http(e)
