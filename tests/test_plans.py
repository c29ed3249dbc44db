"""Unit tests for the day plans module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from onboardly.plans import (
    TOTAL_DAYS,
    DbTaskTemplate,
    TaskTemplate,
    get_day_plan,
    get_effective_tasks,
    seed_rows,
)
from onboardly.plans.catalog import DEPARTMENT_PLANS


class TestGetDayPlan:
    """Tests for built-in plan fallback resolution."""

    @pytest.mark.parametrize("day", [1, 6, 7])
    def test_generic_days_are_shared(self, day):
        """Days 1, 6 and 7 are identical for every department."""
        assert get_day_plan("Engineering", day) == get_day_plan("Sales", day)
        assert get_day_plan("Engineering", day) == get_day_plan("Legal", day)

    def test_department_specific_day(self):
        tasks = get_day_plan("Engineering", 2)
        assert tasks[0] == TaskTemplate(
            id="2-1",
            title="Set up development environment & tools",
            duration="2 hours",
            priority="high",
        )

    def test_unknown_department_uses_default_mid_week(self):
        tasks = get_day_plan("Legal", 3)
        assert [t.title for t in tasks] == [
            "Shadow a senior team member",
            "Attend team meeting",
            "Review current projects",
        ]

    def test_department_names_are_case_sensitive(self):
        assert get_day_plan("engineering", 2) == get_day_plan("Legal", 2)

    @pytest.mark.parametrize("day", [0, 8, -3])
    def test_days_outside_plan_are_empty(self, day):
        assert get_day_plan("Engineering", day) == []

    @given(st.sampled_from(["Unknown", *DEPARTMENT_PLANS]), st.integers(min_value=1, max_value=TOTAL_DAYS))
    def test_every_day_has_tasks(self, department, day):
        """Property test: every department has at least one task each day."""
        tasks = get_day_plan(department, day)
        assert tasks
        assert len({t.id for t in tasks}) == len(tasks)
        assert all(t.id.startswith(f"{day}-") for t in tasks)


class TestGetEffectiveTasks:
    """Tests for stored-template precedence."""

    def test_stored_templates_win(self):
        templates = [
            DbTaskTemplate(department="Design", day_number=2, title="B", duration="1 hour",
                           priority="low", sort_order=2),
            DbTaskTemplate(department="Design", day_number=2, title="A", duration="30 min",
                           priority="high", sort_order=1),
            DbTaskTemplate(department="Design", day_number=3, title="Other day", duration="1 hour",
                           priority="medium"),
            DbTaskTemplate(department="Sales", day_number=2, title="Other dept", duration="1 hour",
                           priority="medium"),
        ]

        tasks = get_effective_tasks(templates, "Design", 2)

        assert [t.title for t in tasks] == ["A", "B"]
        assert tasks[0].id == templates[1].id

    def test_falls_back_to_built_in_plan(self):
        templates = [
            DbTaskTemplate(department="Design", day_number=3, title="Only day 3",
                           duration="1 hour", priority="medium"),
        ]

        assert get_effective_tasks(templates, "Design", 2) == get_day_plan("Design", 2)
        assert get_effective_tasks([], "Design", 5) == get_day_plan("Design", 5)


class TestSeedRows:
    """Tests for seeding a department with defaults."""

    def test_seed_covers_whole_week(self):
        rows = seed_rows("Marketing")

        assert {r.day_number for r in rows} == set(range(1, TOTAL_DAYS + 1))
        assert all(r.department == "Marketing" for r in rows)
        expected = sum(len(get_day_plan("Marketing", d)) for d in range(1, TOTAL_DAYS + 1))
        assert len(rows) == expected

    def test_seed_preserves_order(self):
        rows = [r for r in seed_rows("Sales") if r.day_number == 3]

        assert [r.sort_order for r in rows] == [0, 1]
        assert [r.title for r in rows] == [t.title for t in get_day_plan("Sales", 3)]

    def test_seeded_rows_resolve_to_built_in_titles(self):
        rows = seed_rows("Product")
        tasks = get_effective_tasks(rows, "Product", 4)

        assert [t.title for t in tasks] == [t.title for t in get_day_plan("Product", 4)]

    def test_day_number_is_bounded(self):
        with pytest.raises(ValueError):
            DbTaskTemplate(department="X", day_number=8, title="t", duration="1h", priority="high")
