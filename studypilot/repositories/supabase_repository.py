"""
supabase_repository.py — Remote persistence on Supabase (backend-as-a-service).
Row-level data goes through PostgREST with the service-role key; ids and
defaults are filled in by the database.
"""

import logging

import httpx

from studypilot import supabase_rest
from studypilot.errors import NotFoundError, StorageError, ValidationError
from studypilot.repositories.base import (
    ENTITY_NAMES, REQUIRED_FIELDS, Repository, check_required, check_table, to_jsonable,
)

logger = logging.getLogger(__name__)


class SupabaseRepository(Repository):
    def __init__(self, client: httpx.Client = None):
        self.client = client or supabase_rest.make_client()

    def close(self):
        self.client.close()

    def create(self, table: str, record: dict) -> dict:
        check_required(table, record)
        data = {k: to_jsonable(v) for k, v in record.items()}
        row = supabase_rest.sb_insert(self.client, table, data)
        if not row:
            logger.error(f"Supabase insert into {table} returned no representation")
            raise StorageError(f"{ENTITY_NAMES[table]} was not returned by the store after insert")
        return row

    def get(self, table: str, record_id: str) -> dict:
        check_table(table)
        rows = supabase_rest.sb_select(self.client, table, filters={"id": record_id}, limit=1)
        if not rows:
            raise NotFoundError(ENTITY_NAMES[table], record_id)
        return rows[0]

    def update(self, table: str, record_id: str, partial: dict) -> None:
        check_table(table)
        for field in REQUIRED_FIELDS[table]:
            if field in partial and (partial[field] is None or partial[field] == ""):
                raise ValidationError(f"Field {field} cannot be empty")

        data = {k: to_jsonable(v) for k, v in partial.items()}
        rows = supabase_rest.sb_update(self.client, table, "id", record_id, data)
        if not rows:
            raise NotFoundError(ENTITY_NAMES[table], record_id)

    def list(self, table, filters=None, order_by=None, descending=False, limit=None):
        check_table(table)
        order = None
        if order_by:
            order = f"{order_by}.{'desc' if descending else 'asc'}"
        return supabase_rest.sb_select(self.client, table, filters=filters, order=order, limit=limit)
