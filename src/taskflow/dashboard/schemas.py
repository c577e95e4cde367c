"""Dashboard Pydantic schemas (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from taskflow.tasks.schemas import TaskResponse


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskStats(_CamelModel):
    """Status counts for tasks created today.

    ``done`` and ``pending`` are legacy rollups kept for older clients.
    """

    total: int = 0
    learning: int = 0
    working: int = 0
    testing: int = 0
    completed: int = 0
    done: int = 0
    pending: int = 0
    goal_percent: int = 0


class ProjectStats(_CamelModel):
    office: int = 0
    personal: int = 0


class TimeStats(_CamelModel):
    work_minutes: int = 0
    learning_minutes: int = 0


class TaskLists(_CamelModel):
    work: list[TaskResponse] = []
    learning: list[TaskResponse] = []


class DashboardOverviewResponse(_CamelModel):
    tasks_today: TaskStats
    projects: ProjectStats
    overdue: int
    time: TimeStats
    lists: TaskLists
