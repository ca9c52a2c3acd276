"""Controller that owns the task page state and talks to the API."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Optional, Union

from pydantic import ValidationError as DraftError

from taskman_cli.api.errors import NetworkError
from taskman_cli.api.tasks import TasksAPI
from taskman_cli.controller import transitions
from taskman_cli.controller.events import (
    CancelEdit,
    EditTask,
    Event,
    LoadTasks,
    RequestDelete,
    ResetSearch,
    SelectStatusFilter,
    SetFormField,
    SetSearchMode,
    SetSearchText,
    SubmitForm,
    SubmitSearch,
)
from taskman_cli.controller.state import SearchMode, ViewState
from taskman_cli.utils.logger import get_logger

ConfirmFn = Callable[[str], Union[bool, Awaitable[bool]]]
Transition = Callable[[ViewState], ViewState]

DELETE_PROMPT = "Are you sure you want to delete this task?"


def _decline(prompt: str) -> bool:
    return False


class TaskViewController:
    """Applies user events to a ViewState.

    ``dispatch`` never raises for API failures: they are logged and turned
    into a StatusMessage. Several dispatches may be in flight at once; each
    one applies its result to whatever the state is when its request
    finishes.

    Calls that replace the task collection (load, search, filter) take a
    sequence ticket. By default the last one to complete wins, even if it
    was issued first. With ``discard_stale=True`` a completion older than the
    last applied ticket is dropped instead.
    """

    def __init__(
        self,
        api: TasksAPI,
        *,
        confirm: ConfirmFn = _decline,
        discard_stale: bool = False,
        on_change: Optional[Callable[[ViewState], None]] = None,
        state: Optional[ViewState] = None,
    ):
        self.api = api
        self.confirm = confirm
        self.discard_stale = discard_stale
        self.on_change = on_change
        self.state = state or ViewState()
        self.logger = get_logger()
        self._issued = 0
        self._applied = 0
        self._handlers = {
            LoadTasks: self._on_load,
            SetFormField: self._on_set_form_field,
            SubmitForm: self._on_submit,
            EditTask: self._on_edit,
            CancelEdit: self._on_cancel_edit,
            RequestDelete: self._on_delete,
            SetSearchMode: self._on_set_search_mode,
            SetSearchText: self._on_set_search_text,
            SubmitSearch: self._on_search,
            SelectStatusFilter: self._on_status_filter,
            ResetSearch: self._on_reset_search,
        }

    async def dispatch(self, event: Event) -> ViewState:
        """Run the transition for an event and return the resulting state."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event: {event!r}")
        await handler(event)
        return self.state

    async def load(self) -> ViewState:
        return await self.dispatch(LoadTasks())

    def _apply(self, transition: Transition) -> None:
        self.state = transition(self.state)
        if self.on_change is not None:
            self.on_change(self.state)

    def _ticket(self) -> int:
        self._issued += 1
        return self._issued

    def _accept(self, ticket: int, action: str) -> bool:
        """Whether a finished collection call may still touch the state."""
        if self.discard_stale and ticket < self._applied:
            self.logger.debug(
                "%s: dropping stale result #%d (applied #%d)",
                action,
                ticket,
                self._applied,
            )
            return False
        self._applied = ticket
        return True

    async def _reload(self, after: Optional[Transition] = None) -> bool:
        """Fetch every task; ``after`` runs on top of a successful load."""
        ticket = self._ticket()
        try:
            tasks = await self.api.list_tasks()
        except NetworkError as e:
            self.logger.error("load failed: %s", e)
            if self._accept(ticket, "load"):
                self._apply(transitions.load_failed)
            return False
        if self._accept(ticket, "load"):
            self._apply(lambda s: transitions.tasks_loaded(s, tasks))
            if after is not None:
                self._apply(after)
        return True

    async def _on_load(self, event: LoadTasks) -> None:
        await self._reload()

    async def _on_set_form_field(self, event: SetFormField) -> None:
        self._apply(
            lambda s: transitions.set_form_field(s, event.field, event.value)
        )

    async def _on_submit(self, event: SubmitForm) -> None:
        target = self.state.edit_target
        try:
            draft = self.state.form.to_draft()
        except DraftError:
            self._apply(transitions.blank_title)
            return

        updated = target is not None
        try:
            if updated:
                await self.api.update_task(target, draft)
            else:
                await self.api.create_task(draft)
        except NetworkError as e:
            self.logger.error("submit failed (target=%s): %s", target, e)
            self._apply(transitions.submit_failed)
            return

        self.logger.info("task %s", f"#{target} updated" if updated else "created")
        self._apply(lambda s: transitions.submit_succeeded(s, updated))
        message = self.state.message
        await self._reload(after=lambda s: transitions.show_message(s, message))

    async def _on_edit(self, event: EditTask) -> None:
        self._apply(lambda s: transitions.begin_edit(s, event.task))

    async def _on_cancel_edit(self, event: CancelEdit) -> None:
        self._apply(transitions.cancel_edit)

    async def _on_delete(self, event: RequestDelete) -> None:
        answer = self.confirm(DELETE_PROMPT)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            self.logger.debug("delete of #%s declined", event.task_id)
            return

        try:
            await self.api.delete_task(event.task_id)
        except NetworkError as e:
            self.logger.error("delete of #%s failed: %s", event.task_id, e)
            self._apply(transitions.delete_failed)
            return

        self.logger.info("task #%s deleted", event.task_id)
        await self._reload()
        self._apply(transitions.delete_succeeded)

    async def _on_set_search_mode(self, event: SetSearchMode) -> None:
        self._apply(lambda s: transitions.set_search_mode(s, event.mode))

    async def _on_set_search_text(self, event: SetSearchText) -> None:
        self._apply(lambda s: transitions.set_search_text(s, event.text))

    async def _on_search(self, event: SubmitSearch) -> None:
        search = self.state.search
        if not search.text.strip():
            await self._reload()
            return

        ticket = self._ticket()
        try:
            if search.mode is SearchMode.ID:
                task = await self.api.get_task(search.text)
                results = [task] if task is not None else []
            else:
                results = await self.api.search_by_title(search.text)
        except NetworkError as e:
            self.logger.error(
                "search by %s %r failed: %s", search.mode.value, search.text, e
            )
            if self._accept(ticket, "search"):
                self._apply(transitions.search_failed)
            return

        if self._accept(ticket, "search"):
            self._apply(lambda s: transitions.search_completed(s, results))

    async def _on_status_filter(self, event: SelectStatusFilter) -> None:
        status = event.status
        if not status:
            return

        ticket = self._ticket()
        try:
            results = await self.api.search_by_status(status)
        except NetworkError as e:
            self.logger.error("filter by status %r failed: %s", status, e)
            if self._accept(ticket, "filter"):
                self._apply(lambda s: transitions.status_filter_failed(s, status))
            return

        if self._accept(ticket, "filter"):
            self._apply(lambda s: transitions.status_filtered(s, status, results))

    async def _on_reset_search(self, event: ResetSearch) -> None:
        self._apply(transitions.search_reset)
        await self._reload()

