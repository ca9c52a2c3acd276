"""Data models for the taskman CLI."""

from taskman_cli.models.task import Task, TaskDraft, TaskStatus

__all__ = ["Task", "TaskDraft", "TaskStatus"]
