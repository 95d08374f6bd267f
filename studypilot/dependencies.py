"""
dependencies.py — FastAPI dependencies wiring storage, generation and the workflow.
Tests swap any of these through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from studypilot import config
from studypilot.database import get_db
from studypilot.providers import build_provider
from studypilot.repositories import Repository, SqlRepository, SupabaseRepository
from studypilot.services.generation_gateway import ContentGenerationGateway
from studypilot.services.goal_workflow import GoalWorkflow


def get_repository(db: Session = Depends(get_db)):
    """Repository for the configured STORAGE_BACKEND."""
    if config.STORAGE_BACKEND == "supabase":
        repo = SupabaseRepository()
        try:
            yield repo
        finally:
            repo.close()
    else:
        yield SqlRepository(db)


_gateway_instance = None


def get_gateway() -> ContentGenerationGateway:
    global _gateway_instance
    if _gateway_instance is None:
        _gateway_instance = ContentGenerationGateway(build_provider())
    return _gateway_instance


def get_workflow(
    repo: Repository = Depends(get_repository),
    gateway: ContentGenerationGateway = Depends(get_gateway),
) -> GoalWorkflow:
    return GoalWorkflow(repo, gateway)
