"""
progress.py — Completion aggregation over a plan's daily checkpoints.
Pure functions; the result is recomputed on every read and never stored.
"""

import math
from typing import Iterable

from studypilot.schemas import Progress


def _is_completed(item) -> bool:
    if isinstance(item, dict):
        return bool(item.get("completed"))
    return bool(getattr(item, "completed", False))


def compute_progress(contents: Iterable) -> Progress:
    """Total, completed and rounded percentage for a set of daily contents.

    Accepts rows (dicts) or DailyContent records. Percentages round half up,
    so 1 of 8 days reads as 13%.
    """
    items = list(contents)
    total = len(items)
    completed = sum(1 for c in items if _is_completed(c))
    if total == 0:
        return Progress(total=0, completed=0, percentage=0, step_percentage=0)

    return Progress(
        total=total,
        completed=completed,
        percentage=math.floor(100 * completed / total + 0.5),
        # share of the trail a single day is worth
        step_percentage=math.ceil(100 / total),
    )
