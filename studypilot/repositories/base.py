from abc import ABC, abstractmethod
from datetime import datetime

from studypilot.errors import ValidationError


# Required fields per table. Empty strings count as missing.
REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "study_goals": ("user_id", "title"),
    "study_files": ("user_id", "file_name", "file_path"),
    "study_plans": ("goal_id", "plan_content"),
    "daily_study_content": ("plan_id", "day_number", "content"),
    "profiles": ("id",),
}

# Human-readable entity names for error messages
ENTITY_NAMES = {
    "study_goals": "Goal",
    "study_files": "File",
    "study_plans": "Plan",
    "daily_study_content": "Daily content",
    "profiles": "Profile",
}


def check_table(table: str) -> None:
    if table not in REQUIRED_FIELDS:
        raise ValidationError(f"Unknown table: {table}")


def check_required(table: str, record: dict) -> None:
    """Raise ValidationError if a required field is missing or blank."""
    check_table(table)
    missing = [
        field for field in REQUIRED_FIELDS[table]
        if record.get(field) is None
        or (isinstance(record.get(field), str) and not record[field].strip())
    ]
    if missing:
        raise ValidationError(f"Missing required field(s) for {table}: {', '.join(missing)}")


def to_jsonable(value):
    """Render datetimes as ISO-8601 so records survive a JSON round-trip."""
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class Repository(ABC):
    """Uniform CRUD contract over the study tables.

    Records are plain dicts keyed by column name. Implementations must raise
    NotFoundError for absent ids and ValidationError for missing required
    fields, so the workflow never depends on which store is behind it.
    """

    @abstractmethod
    def create(self, table: str, record: dict) -> dict:
        """Insert a record and return it with its id and defaults filled in."""
        ...

    @abstractmethod
    def get(self, table: str, record_id: str) -> dict:
        """Fetch one record by id. Raises NotFoundError."""
        ...

    @abstractmethod
    def list(
        self,
        table: str,
        filters: dict | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        """Equality-filtered, optionally ordered listing."""
        ...

    @abstractmethod
    def update(self, table: str, record_id: str, partial: dict) -> None:
        """Apply a partial update. Raises NotFoundError."""
        ...

    def find_one(self, table: str, filters: dict, order_by: str | None = None,
                 descending: bool = False) -> dict | None:
        rows = self.list(table, filters=filters, order_by=order_by, descending=descending, limit=1)
        return rows[0] if rows else None
