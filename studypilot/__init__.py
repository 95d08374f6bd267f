"""StudyPilot — goals, AI study plans and daily checkpoints."""

__version__ = "0.1.0"
