"""Terminal client for the Task Manager REST API."""

__version__ = "0.1.0"
