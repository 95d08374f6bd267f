from studypilot.services.generation_gateway import ContentGenerationGateway, GeneratedText
from studypilot.services.goal_workflow import GoalWorkflow, InFlightRegistry
from studypilot.services.progress import compute_progress
from studypilot.services.setup_wizard import SetupWizard, WizardStep, WizardStepError


__all__ = [
    "ContentGenerationGateway",
    "GeneratedText",
    "GoalWorkflow",
    "InFlightRegistry",
    "compute_progress",
    "SetupWizard",
    "WizardStep",
    "WizardStepError",
]
