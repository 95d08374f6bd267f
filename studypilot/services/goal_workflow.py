"""
goal_workflow.py — Goal → plan → daily checkpoint orchestration
Creates goals, generates plans and day-by-day content through the generation
gateway, tracks completion and derives progress. Storage-agnostic: every
read and write goes through the injected Repository.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from studypilot.errors import DuplicateDayError, NotFoundError, ValidationError
from studypilot.repositories.base import Repository
from studypilot.schemas import (
    DailyContent, Goal, GoalProgress, GoalState, GoalStatus, Plan, Priority, Profile, StudyFile,
)
from studypilot.services.generation_gateway import ContentGenerationGateway
from studypilot.services.progress import compute_progress

logger = logging.getLogger(__name__)

GOALS = "study_goals"
FILES = "study_files"
PLANS = "study_plans"
DAYS = "daily_study_content"
PROFILES = "profiles"

EDITABLE_GOAL_FIELDS = {"title", "description", "target_date", "priority", "category"}


@dataclass(eq=False)
class InFlight:
    """One running generation call. Compared by identity."""

    state: GoalState
    day_number: Optional[int] = None


class InFlightRegistry:
    """Generation calls currently running, per goal id.

    Reporting only: it does not stop a second call for the same goal.
    Overlapping calls each hold their own entry; the most recently started
    one that is still running is reported.
    """

    def __init__(self):
        self._running: dict[str, list[InFlight]] = {}

    def start(self, goal_id: str, state: GoalState, day_number: int | None = None) -> InFlight:
        entry = InFlight(state, day_number)
        self._running.setdefault(goal_id, []).append(entry)
        return entry

    def finish(self, goal_id: str, entry: InFlight):
        entries = self._running.get(goal_id, [])
        self._running[goal_id] = [e for e in entries if e is not entry]
        if not self._running[goal_id]:
            del self._running[goal_id]

    def get(self, goal_id: str) -> InFlight | None:
        entries = self._running.get(goal_id)
        return entries[-1] if entries else None


# Shared across requests so a state query sees generation started by another request
in_flight = InFlightRegistry()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_priority(priority) -> str:
    value = getattr(priority, "value", priority)
    try:
        return Priority(value).value
    except ValueError:
        raise ValidationError(f"Priority must be one of: {', '.join(p.value for p in Priority)}")


def _clean_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Please enter a goal title")
    return title


class GoalWorkflow:
    def __init__(
        self,
        repo: Repository,
        gateway: ContentGenerationGateway | None = None,
        clock: Callable[[], datetime] | None = None,
        registry: InFlightRegistry | None = None,
    ):
        self.repo = repo
        self.gateway = gateway
        self.clock = clock or _utcnow
        self.registry = registry or in_flight

    # ------------------------------------------------------------------
    # Ownership-aware loaders. A record owned by someone else reads as absent.
    def _goal(self, goal_id: str, owner_id: str | None = None) -> Goal:
        goal = Goal.model_validate(self.repo.get(GOALS, goal_id))
        if owner_id is not None and goal.user_id != owner_id:
            raise NotFoundError("Goal", goal_id)
        return goal

    def _plan(self, plan_id: str, owner_id: str | None = None) -> tuple[Plan, Goal]:
        plan = Plan.model_validate(self.repo.get(PLANS, plan_id))
        try:
            goal = self._goal(plan.goal_id, owner_id)
        except NotFoundError:
            raise NotFoundError("Plan", plan_id)
        return plan, goal

    def _day(self, content_id: str, owner_id: str | None = None) -> DailyContent:
        content = DailyContent.model_validate(self.repo.get(DAYS, content_id))
        if owner_id is None:
            return content
        if content.user_id is not None:
            if content.user_id != owner_id:
                raise NotFoundError("Daily content", content_id)
            return content
        try:
            self._plan(content.plan_id, owner_id)
        except NotFoundError:
            raise NotFoundError("Daily content", content_id)
        return content

    def _require_gateway(self) -> ContentGenerationGateway:
        if self.gateway is None:
            raise RuntimeError("GoalWorkflow was built without a generation gateway")
        return self.gateway

    # ------------------------------------------------------------------
    # Goals
    def create_goal(
        self,
        owner_id: str,
        title: str,
        priority: str = "medium",
        file_id: str | None = None,
        description: str | None = None,
        target_date: str | None = None,
        category: str | None = None,
    ) -> Goal:
        if not owner_id:
            raise ValidationError("Owner is required")
        record = {
            "user_id": owner_id,
            "title": _clean_title(title),
            "priority": _check_priority(priority),
            "description": description or None,
            "target_date": target_date or None,
            "category": category or None,
            "completed": False,
            "created_at": self.clock(),
        }
        goal = Goal.model_validate(self.repo.create(GOALS, record))
        logger.info(f"Goal {goal.id} created for {owner_id}")

        if file_id:
            goal = self._link_file(goal, file_id)
        return goal

    def _link_file(self, goal: Goal, file_id: str) -> Goal:
        """Attach a file to a goal. Failure leaves the goal in place, unlinked."""
        try:
            study_file = StudyFile.model_validate(self.repo.get(FILES, file_id))
            if study_file.user_id != goal.user_id:
                raise NotFoundError("File", file_id)
            self.repo.update(GOALS, goal.id, {"file_id": file_id})
        except Exception as e:
            logger.warning(f"Could not link file {file_id} to goal {goal.id}: {e}")
            return goal
        return goal.model_copy(update={"file_id": file_id})

    def list_goals(self, owner_id: str) -> list[Goal]:
        """Active goals of the owner, newest first."""
        rows = self.repo.list(
            GOALS,
            filters={"user_id": owner_id, "completed": False},
            order_by="created_at",
            descending=True,
        )
        return [Goal.model_validate(r) for r in rows]

    def get_goal(self, goal_id: str, owner_id: str | None = None) -> Goal:
        return self._goal(goal_id, owner_id)

    def update_goal(self, goal_id: str, changes: dict, owner_id: str | None = None) -> Goal:
        self._goal(goal_id, owner_id)
        if "user_id" in changes:
            raise ValidationError("Goal owner cannot be changed")
        unknown = set(changes) - EDITABLE_GOAL_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        partial = dict(changes)
        if "title" in partial:
            partial["title"] = _clean_title(partial["title"])
        if "priority" in partial:
            partial["priority"] = _check_priority(partial["priority"])
        if partial:
            self.repo.update(GOALS, goal_id, partial)
        return self._goal(goal_id)

    def complete_goal(self, goal_id: str, completed: bool = True, owner_id: str | None = None) -> Goal:
        self._goal(goal_id, owner_id)
        self.repo.update(GOALS, goal_id, {"completed": bool(completed)})
        return self._goal(goal_id)

    def goal_status(self, goal_id: str, owner_id: str | None = None) -> GoalStatus:
        """State of the goal, with the day number while a day is generating."""
        goal = self._goal(goal_id, owner_id)
        if goal.completed:
            return GoalStatus(goal_id=goal_id, state=GoalState.completed)
        running = self.registry.get(goal_id)
        if running is not None:
            return GoalStatus(goal_id=goal_id, state=running.state, day_number=running.day_number)
        if self.current_plan(goal_id) is None:
            return GoalStatus(goal_id=goal_id, state=GoalState.created)
        return GoalStatus(goal_id=goal_id, state=GoalState.plan_ready)

    def goal_state(self, goal_id: str, owner_id: str | None = None) -> GoalState:
        return self.goal_status(goal_id, owner_id).state

    # ------------------------------------------------------------------
    # Files (metadata only; bytes live in external storage)
    def register_file(
        self,
        owner_id: str,
        file_name: str,
        file_type: str | None = None,
        file_path: str | None = None,
    ) -> StudyFile:
        file_name = (file_name or "").strip()
        if not file_name:
            raise ValidationError("File name is required")
        record = {
            "user_id": owner_id,
            "file_name": file_name,
            "file_path": file_path or f"{owner_id}/{uuid.uuid4().hex}-{file_name}",
            "file_type": file_type,
            "created_at": self.clock(),
        }
        return StudyFile.model_validate(self.repo.create(FILES, record))

    def list_files(self, owner_id: str) -> list[StudyFile]:
        rows = self.repo.list(FILES, filters={"user_id": owner_id}, order_by="created_at", descending=True)
        return [StudyFile.model_validate(r) for r in rows]

    # ------------------------------------------------------------------
    # Plans
    async def generate_plan(self, goal_id: str, owner_id: str | None = None) -> Plan:
        """Generate and store a new plan. Each call adds a plan; the latest wins."""
        gateway = self._require_gateway()
        goal = self._goal(goal_id, owner_id)
        files = self.repo.list(FILES, filters={"user_id": goal.user_id}, order_by="created_at")

        running = self.registry.start(goal_id, GoalState.plan_pending)
        try:
            generated = await gateway.generate_plan(goal, [f["file_name"] for f in files])
        finally:
            self.registry.finish(goal_id, running)

        row = self.repo.create(PLANS, {
            "goal_id": goal.id,
            "user_id": goal.user_id,
            "plan_content": generated.text,
            "created_at": self.clock(),
        })
        logger.info(f"Plan generated for goal {goal_id} via {generated.provider}")
        return Plan.model_validate(row)

    def current_plan(self, goal_id: str, owner_id: str | None = None) -> Plan | None:
        if owner_id is not None:
            self._goal(goal_id, owner_id)
        row = self.repo.find_one(PLANS, {"goal_id": goal_id}, order_by="created_at", descending=True)
        return Plan.model_validate(row) if row else None

    def list_plans(self, goal_id: str, owner_id: str | None = None) -> list[Plan]:
        self._goal(goal_id, owner_id)
        rows = self.repo.list(PLANS, filters={"goal_id": goal_id}, order_by="created_at", descending=True)
        return [Plan.model_validate(r) for r in rows]

    # ------------------------------------------------------------------
    # Daily content
    async def generate_daily_content(self, plan_id: str, day_number: int,
                                     owner_id: str | None = None) -> DailyContent:
        if isinstance(day_number, bool) or not isinstance(day_number, int) or day_number < 1:
            raise ValidationError("Day number must be a positive integer")
        gateway = self._require_gateway()
        plan, goal = self._plan(plan_id, owner_id)

        # read-then-write; a true double submit can still race past this
        existing = self.repo.find_one(DAYS, {"plan_id": plan_id, "day_number": day_number})
        if existing:
            raise DuplicateDayError(plan_id, day_number)

        running = self.registry.start(goal.id, GoalState.day_generating, day_number)
        try:
            generated = await gateway.generate_daily_content(plan, goal, day_number)
        finally:
            self.registry.finish(goal.id, running)

        row = self.repo.create(DAYS, {
            "plan_id": plan_id,
            "user_id": plan.user_id or goal.user_id,
            "day_number": day_number,
            "content": generated.text,
            "completed": False,
            "created_at": self.clock(),
        })
        return DailyContent.model_validate(row)

    def list_daily_content(self, plan_id: str, owner_id: str | None = None) -> list[DailyContent]:
        """Checkpoints of a plan, ascending by day number."""
        if owner_id is not None:
            self._plan(plan_id, owner_id)
        rows = self.repo.list(DAYS, filters={"plan_id": plan_id}, order_by="day_number")
        return [DailyContent.model_validate(r) for r in rows]

    def toggle_day_completion(self, content_id: str, completed: bool,
                              owner_id: str | None = None) -> DailyContent:
        content = self._day(content_id, owner_id)
        self.repo.update(DAYS, content_id, {"completed": bool(completed)})
        return content.model_copy(update={"completed": bool(completed)})

    # ------------------------------------------------------------------
    # Progress
    def goal_progress(self, goal_id: str, owner_id: str | None = None) -> GoalProgress:
        goal = self._goal(goal_id, owner_id)
        plan = self.current_plan(goal_id)
        contents = self.list_daily_content(plan.id) if plan else []
        return GoalProgress(
            goal=goal,
            plan_id=plan.id if plan else None,
            progress=compute_progress(contents),
        )

    def dashboard(self, owner_id: str) -> list[GoalProgress]:
        """Every active goal with the progress of its current plan."""
        return [self.goal_progress(goal.id) for goal in self.list_goals(owner_id)]

    # ------------------------------------------------------------------
    # Profile (tokens and streak)
    def get_profile(self, owner_id: str) -> Profile:
        return Profile.model_validate(self.repo.get(PROFILES, owner_id))

    def create_profile(self, owner_id: str, display_name: str | None = None) -> Profile:
        if self.repo.find_one(PROFILES, {"id": owner_id}):
            raise ValidationError("Profile already exists")
        row = self.repo.create(PROFILES, {
            "id": owner_id,
            "display_name": display_name or None,
            "tokens": 0,
            "streak": 0,
            "created_at": self.clock(),
        })
        return Profile.model_validate(row)

    def update_profile(self, owner_id: str, tokens: int | None = None, streak: int | None = None,
                       display_name: str | None = None) -> Profile:
        partial = {}
        for field, value in (("tokens", tokens), ("streak", streak)):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(f"{field} must be a non-negative integer")
            partial[field] = value
        if display_name is not None:
            partial["display_name"] = display_name.strip() or None

        if partial:
            self.repo.update(PROFILES, owner_id, partial)
        return self.get_profile(owner_id)
