from studypilot.repositories.base import Repository, REQUIRED_FIELDS
from studypilot.repositories.sql_repository import SqlRepository
from studypilot.repositories.supabase_repository import SupabaseRepository


__all__ = [
    "Repository",
    "REQUIRED_FIELDS",
    "SqlRepository",
    "SupabaseRepository",
]
