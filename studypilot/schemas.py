"""
schemas.py — Typed records exchanged between the workflow and its callers.
Rows from either store validate into these models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Goal(Record):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    target_date: Optional[str] = None
    priority: Priority = Priority.medium
    category: Optional[str] = None
    file_id: Optional[str] = None
    completed: bool = False
    created_at: datetime


class StudyFile(Record):
    id: str
    user_id: str
    file_name: str
    file_path: str
    file_type: Optional[str] = None
    created_at: datetime


class Plan(Record):
    id: str
    goal_id: str
    user_id: Optional[str] = None
    plan_content: str
    created_at: datetime


class DailyContent(Record):
    id: str
    plan_id: str
    user_id: Optional[str] = None
    day_number: int
    content: str
    completed: bool = False
    created_at: datetime


class Profile(Record):
    id: str
    display_name: Optional[str] = None
    tokens: int = 0
    streak: int = 0
    created_at: Optional[datetime] = None


class Progress(BaseModel):
    total: int
    completed: int
    percentage: int
    step_percentage: int


class GoalProgress(BaseModel):
    goal: Goal
    plan_id: Optional[str] = None
    progress: Progress


class GoalState(str, Enum):
    created = "created"
    plan_pending = "plan_pending"
    plan_ready = "plan_ready"
    day_generating = "day_generating"
    completed = "completed"


class GoalStatus(BaseModel):
    goal_id: str
    state: GoalState
    day_number: Optional[int] = None
