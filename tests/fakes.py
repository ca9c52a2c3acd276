"""Small builders shared by the test modules."""

from __future__ import annotations

from taskman_cli.models.task import Task


def make_task(
    id_: int = 1,
    title: str = "A",
    status: str = "PLANNED",
    description: str | None = None,
    deadline: str | None = None,
) -> Task:
    return Task(
        id=id_,
        title=title,
        status=status,
        description=description,
        deadline=deadline,
    )
