from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional

from studypilot.auth import get_current_user
from studypilot.dependencies import get_workflow
from studypilot.routes import to_http
from studypilot.services.goal_workflow import GoalWorkflow

router = APIRouter(prefix="/api/v1/files", tags=["Files"])


class FileRegister(BaseModel):
    file_name: str
    file_type: Optional[str] = None
    file_path: Optional[str] = None  # storage key when the client already uploaded


@router.get("")
async def list_files(user_id: str = Depends(get_current_user), workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        return workflow.list_files(user_id)
    except Exception as e:
        raise to_http(e)


@router.post("", status_code=201)
async def register_file(body: FileRegister, user_id: str = Depends(get_current_user),
                        workflow: GoalWorkflow = Depends(get_workflow)):
    try:
        study_file = workflow.register_file(user_id, body.file_name, body.file_type, body.file_path)
        return {"status": "success", "data": study_file}
    except Exception as e:
        raise to_http(e)
