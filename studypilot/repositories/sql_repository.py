"""
sql_repository.py — Local persistence through SQLAlchemy.
SQLite by default; any SQLAlchemy URL works through DATABASE_URL.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studypilot.errors import NotFoundError, ValidationError
from studypilot.models import MODELS_BY_TABLE
from studypilot.repositories.base import (
    ENTITY_NAMES, REQUIRED_FIELDS, Repository, check_required, check_table,
)

logger = logging.getLogger(__name__)


class SqlRepository(Repository):
    def __init__(self, db: Session):
        self.db = db

    def _model(self, table: str):
        check_table(table)
        return MODELS_BY_TABLE[table]

    @staticmethod
    def _row(obj) -> dict:
        row = {}
        for c in obj.__table__.columns:
            value = getattr(obj, c.name)
            # SQLite drops the offset; stored values are always UTC
            if isinstance(value, datetime) and value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            row[c.name] = value
        return row

    @staticmethod
    def _values(model, record: dict) -> dict:
        columns = model.__table__.columns
        unknown = [k for k in record if k not in columns]
        if unknown:
            raise ValidationError(f"Unknown field(s) for {model.__tablename__}: {', '.join(unknown)}")

        values = {}
        for key, value in record.items():
            if isinstance(columns[key].type, DateTime) and isinstance(value, str):
                value = datetime.fromisoformat(value)
            if isinstance(value, datetime) and value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            values[key] = value
        return values

    def _commit(self, table: str):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error on {table}: {e.orig}")
            raise ValidationError(f"{ENTITY_NAMES[table]} violates a uniqueness constraint") from e

    def create(self, table: str, record: dict) -> dict:
        model = self._model(table)
        check_required(table, record)
        obj = model(**self._values(model, record))
        self.db.add(obj)
        self._commit(table)
        self.db.refresh(obj)
        return self._row(obj)

    def get(self, table: str, record_id: str) -> dict:
        model = self._model(table)
        obj = self.db.get(model, record_id)
        if obj is None:
            raise NotFoundError(ENTITY_NAMES[table], record_id)
        return self._row(obj)

    def update(self, table: str, record_id: str, partial: dict) -> None:
        model = self._model(table)
        obj = self.db.get(model, record_id)
        if obj is None:
            raise NotFoundError(ENTITY_NAMES[table], record_id)

        values = self._values(model, partial)
        for field in REQUIRED_FIELDS[table]:
            if field in values and (values[field] is None or values[field] == ""):
                raise ValidationError(f"Field {field} cannot be empty")

        for k, v in values.items():
            setattr(obj, k, v)
        self._commit(table)

    def list(self, table, filters=None, order_by=None, descending=False, limit=None):
        model = self._model(table)
        query = self.db.query(model)
        if filters:
            unknown = [k for k in filters if k not in model.__table__.columns]
            if unknown:
                raise ValidationError(f"Unknown filter(s) for {table}: {', '.join(unknown)}")
            query = query.filter_by(**filters)
        if order_by:
            if order_by not in model.__table__.columns:
                raise ValidationError(f"Unknown order column for {table}: {order_by}")
            column = getattr(model, order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            query = query.limit(limit)
        return [self._row(obj) for obj in query.all()]
