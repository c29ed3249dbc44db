"""Resolution of the tasks an employee sees on a given onboarding day."""

from collections.abc import Iterable

from .catalog import DEFAULT_MID_WEEK, DEPARTMENT_PLANS, GENERIC_DAYS, tasks_for
from .models import TOTAL_DAYS, DbTaskTemplate, TaskTemplate


def get_day_plan(department: str, day: int) -> list[TaskTemplate]:
    """Built-in plan for a department and day.

    Falls back from the generic days, to the department's own plan, to the
    default mid-week plan. Days outside the plan yield an empty list.
    """
    generic = tasks_for(GENERIC_DAYS, day)
    if generic is not None:
        return generic

    department_plan = DEPARTMENT_PLANS.get(department)
    if department_plan is not None:
        tasks = tasks_for(department_plan, day)
        if tasks is not None:
            return tasks

    return tasks_for(DEFAULT_MID_WEEK, day) or []


def get_effective_tasks(
    templates: Iterable[DbTaskTemplate],
    department: str,
    day: int,
) -> list[TaskTemplate]:
    """Stored templates for this department and day, else the built-in plan."""
    matching = sorted(
        (t for t in templates if t.department == department and t.day_number == day),
        key=lambda t: t.sort_order,
    )
    if matching:
        return [t.to_task() for t in matching]
    return get_day_plan(department, day)


def seed_rows(department: str) -> list[DbTaskTemplate]:
    """Template rows that seed a department with the built-in plan."""
    rows = []
    for day in range(1, TOTAL_DAYS + 1):
        for i, task in enumerate(get_day_plan(department, day)):
            rows.append(DbTaskTemplate(
                department=department,
                day_number=day,
                title=task.title,
                duration=task.duration,
                priority=task.priority,
                sort_order=i,
            ))
    return rows
