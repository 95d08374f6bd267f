from fastapi import APIRouter, Depends

from studypilot.auth import get_current_user
from studypilot.dependencies import get_workflow
from studypilot.routes import to_http
from studypilot.services.goal_workflow import GoalWorkflow

router = APIRouter(prefix="/api/v1/dashboard", tags=["Dashboard"])


@router.get("/today")
async def today(user_id: str = Depends(get_current_user), workflow: GoalWorkflow = Depends(get_workflow)):
    """Active goals with the progress of their current plans."""
    try:
        return workflow.dashboard(user_id)
    except Exception as e:
        raise to_http(e)
