"""
setup_wizard.py — First-run onboarding as an explicit state machine
upload → goal → generating → done. Each step maps to Goal Workflow calls;
the wizard owns sequencing only, never storage.
"""

import logging
from enum import Enum

from studypilot.errors import GenerationError, ValidationError
from studypilot.schemas import Goal, Plan, StudyFile
from studypilot.services.goal_workflow import GoalWorkflow

logger = logging.getLogger(__name__)


class WizardStep(str, Enum):
    upload = "upload"
    goal = "goal"
    generating = "generating"
    done = "done"


class WizardStepError(ValidationError):
    """An action was attempted from the wrong step."""

    def __init__(self, action: str, step: WizardStep):
        super().__init__(f"Cannot {action} while the wizard is at step '{step.value}'")
        self.action = action
        self.step = step


class SetupWizard:
    def __init__(self, workflow: GoalWorkflow, owner_id: str):
        self.workflow = workflow
        self.owner_id = owner_id
        self.step = WizardStep.upload
        self.uploaded_file: StudyFile | None = None
        self.goal: Goal | None = None
        self.plan: Plan | None = None
        self.error: str | None = None

    def _expect(self, action: str, *steps: WizardStep):
        if self.step not in steps:
            raise WizardStepError(action, self.step)

    def attach_file(self, file_name: str, file_type: str | None = None,
                    file_path: str | None = None) -> StudyFile:
        self._expect("attach a file", WizardStep.upload)
        self.uploaded_file = self.workflow.register_file(self.owner_id, file_name, file_type, file_path)
        self.step = WizardStep.goal
        return self.uploaded_file

    def skip_upload(self):
        self._expect("skip the upload", WizardStep.upload)
        self.step = WizardStep.goal

    async def submit_goal(self, title: str, priority: str = "medium", description: str | None = None,
                          target_date: str | None = None, category: str | None = None) -> Plan | None:
        """Create the goal and generate its first plan.

        Validation errors propagate and keep the wizard at the goal step.
        A generation failure is recorded in `error`; the goal stays created and
        retry_plan() can be used from the goal step.
        """
        self._expect("submit a goal", WizardStep.goal)
        if self.goal is not None:
            raise WizardStepError("submit a second goal", self.step)

        self.goal = self.workflow.create_goal(
            self.owner_id,
            title,
            priority,
            file_id=self.uploaded_file.id if self.uploaded_file else None,
            description=description,
            target_date=target_date,
            category=category,
        )
        return await self._generate()

    async def retry_plan(self) -> Plan | None:
        self._expect("retry plan generation", WizardStep.goal)
        if self.goal is None:
            raise WizardStepError("retry plan generation before creating a goal", self.step)
        return await self._generate()

    async def _generate(self) -> Plan | None:
        self.step = WizardStep.generating
        self.error = None
        try:
            self.plan = await self.workflow.generate_plan(self.goal.id)
        except GenerationError as e:
            logger.warning(f"Setup plan generation failed for goal {self.goal.id}: {e.message}")
            self.error = e.message
            self.step = WizardStep.goal
            return None
        except Exception:
            self.step = WizardStep.goal
            raise
        self.step = WizardStep.done
        return self.plan
