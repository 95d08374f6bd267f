from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional

from studypilot.auth import get_current_user
from studypilot.dependencies import get_workflow
from studypilot.routes import to_http
from studypilot.services.goal_workflow import GoalWorkflow
from studypilot.services.setup_wizard import SetupWizard

router = APIRouter(prefix="/api/v1/setup", tags=["Setup"])


class SetupFile(BaseModel):
    file_name: str
    file_type: Optional[str] = None
    file_path: Optional[str] = None


class SetupGoal(BaseModel):
    title: str
    priority: Optional[str] = "medium"
    description: Optional[str] = None
    target_date: Optional[str] = None
    category: Optional[str] = None


class SetupRequest(BaseModel):
    file: Optional[SetupFile] = None
    goal: SetupGoal


@router.post("")
async def run_setup(body: SetupRequest, user_id: str = Depends(get_current_user),
                    workflow: GoalWorkflow = Depends(get_workflow)):
    """Run the onboarding wizard end to end: optional material, goal, first plan."""
    wizard = SetupWizard(workflow, user_id)
    try:
        if body.file:
            wizard.attach_file(body.file.file_name, body.file.file_type, body.file.file_path)
        else:
            wizard.skip_upload()

        await wizard.submit_goal(
            body.goal.title,
            body.goal.priority or "medium",
            description=body.goal.description,
            target_date=body.goal.target_date,
            category=body.goal.category,
        )
    except Exception as e:
        raise to_http(e)

    return {
        "step": wizard.step,
        "file": wizard.uploaded_file,
        "goal": wizard.goal,
        "plan": wizard.plan,
        "error": wizard.error,
    }
