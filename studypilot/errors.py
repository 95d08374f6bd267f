"""
errors.py — Domain error taxonomy.
Every error is scoped to a single operation and reported to the caller;
routes translate them into HTTP statuses.
"""


class StudyPilotError(Exception):
    """Base class for all workflow and storage errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StudyPilotError):
    """A required field is missing or a value is out of range."""

    status_code = 400


class NotFoundError(StudyPilotError):
    """The referenced record does not exist (or is not visible to the caller)."""

    status_code = 404

    def __init__(self, entity: str, record_id):
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class DuplicateDayError(StudyPilotError):
    """Content for this (plan, day) pair has already been generated."""

    status_code = 409

    def __init__(self, plan_id: str, day_number: int):
        super().__init__(f"Day {day_number} content is already generated.")
        self.plan_id = plan_id
        self.day_number = day_number


class StorageError(StudyPilotError):
    """The backing store accepted a request but did not answer as expected."""

    status_code = 502


class GenerationError(StudyPilotError):
    """The upstream text-generation call failed."""

    status_code = 502

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider
