"""Onboarding day plans.

Hides where a day's checklist comes from: administrator-defined templates
when they exist, built-in department plans otherwise.
"""

from .models import TOTAL_DAYS, DbTaskTemplate, Priority, TaskTemplate
from .resolver import get_day_plan, get_effective_tasks, seed_rows

__all__ = [
    "TOTAL_DAYS",
    "DbTaskTemplate",
    "Priority",
    "TaskTemplate",
    "get_day_plan",
    "get_effective_tasks",
    "seed_rows",
]
