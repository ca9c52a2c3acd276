"""Full-screen task page built on Textual.

The widgets only translate user input into controller events and redraw
from the ViewState the controller reports back; every rule lives in
TaskViewController.
"""

import asyncio
from typing import Optional

from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Select,
    Static,
)

from taskman_cli.api.client import APIClient
from taskman_cli.api.tasks import TasksAPI
from taskman_cli.controller import (
    CancelEdit,
    EditTask,
    LoadTasks,
    MessageLevel,
    RequestDelete,
    ResetSearch,
    SelectStatusFilter,
    SetFormField,
    SetSearchMode,
    SetSearchText,
    SubmitForm,
    SubmitSearch,
    TaskViewController,
    ViewState,
)
from taskman_cli.controller.events import Event
from taskman_cli.models.task import Task, TaskStatus
from taskman_cli.ui.formatters import TASK_COLUMNS, status_options, task_row
from taskman_cli.utils.logger import get_logger

SEARCH_MODES = [("Search by ID", "id"), ("Search by Title", "title")]
FORM_INPUTS = {
    "title-input": "title",
    "description-input": "description",
    "deadline-input": "deadline",
}
MESSAGE_CLASSES = {
    MessageLevel.INFO: "info",
    MessageLevel.SUCCESS: "success",
    MessageLevel.ERROR: "error",
}


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no dialog; dismisses with the answer."""

    BINDINGS = [("escape", "answer(False)", "Cancel")]

    def __init__(self, prompt: str):
        super().__init__()
        self.prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label(self.prompt, id="question")
            with Horizontal(id="dialog-buttons"):
                yield Button("Delete", variant="error", id="confirm-yes")
                yield Button("Cancel", id="confirm-no")

    @on(Button.Pressed, "#confirm-yes")
    def handle_yes(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#confirm-no")
    def handle_no(self) -> None:
        self.dismiss(False)

    def action_answer(self, value: bool) -> None:
        self.dismiss(value)


class TaskManagerApp(App):
    """The task page: search, status filter, task form and task table."""

    TITLE = "Task Manager"

    CSS = """
    #message {
        height: 1;
        padding: 0 1;
    }

    #message.success, #message.info {
        color: $success;
    }

    #message.error {
        color: $error;
    }

    #search-row, #filter-row, #form-buttons {
        height: auto;
    }

    #search-mode, #status-filter {
        width: 24;
    }

    #search-text {
        width: 1fr;
    }

    #filter-row Label {
        padding: 1 1;
    }

    #form {
        height: auto;
        width: 60;
    }

    #cancel-edit {
        display: none;
    }

    #cancel-edit.visible {
        display: block;
    }

    #tasks {
        height: 1fr;
    }

    ConfirmScreen {
        align: center middle;
    }

    #dialog {
        width: 50;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }

    #dialog-buttons {
        height: auto;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("f5", "reload", "Reload"),
        ("f2", "edit_selected", "Edit"),
        ("f8", "delete_selected", "Delete"),
        ("escape", "cancel_edit", "Cancel edit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        client: APIClient,
        *,
        discard_stale: bool = False,
        api: Optional[TasksAPI] = None,
    ):
        super().__init__()
        self.client = client
        self.controller = TaskViewController(
            api or TasksAPI(client),
            confirm=self.confirm,
            discard_stale=discard_stale,
            on_change=self.render_state,
        )
        self._shown_statuses: tuple[str, ...] = ()
        self._shown_tasks: Optional[tuple[Task, ...]] = None
        # set while a keystroke is being applied; inputs already show it
        self._typing = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="message")
        with Horizontal(id="search-row"):
            yield Select(
                SEARCH_MODES, value="title", allow_blank=False, id="search-mode"
            )
            yield Input(placeholder="Enter title", id="search-text")
            yield Button("Search", id="search")
            yield Button("Reset", id="reset")
        with Horizontal(id="filter-row"):
            yield Label("Filter by Status:")
            yield Select([], prompt="-- Select Status --", id="status-filter")
        with Vertical(id="form"):
            yield Input(placeholder="Title", id="title-input")
            yield Input(placeholder="Description", id="description-input")
            yield Select(
                status_options(TaskStatus.values()),
                value=TaskStatus.PLANNED.value,
                allow_blank=False,
                id="status-input",
            )
            yield Input(
                placeholder="Deadline (YYYY-MM-DDTHH:MM)", id="deadline-input"
            )
            with Horizontal(id="form-buttons"):
                yield Button("Add Task", variant="primary", id="submit")
                yield Button("Cancel", id="cancel-edit")
        yield DataTable(id="tasks", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#tasks", DataTable).add_columns(*TASK_COLUMNS)
        get_logger().info("task page started against %s", self.client.base_url)
        self.send(LoadTasks())

    async def on_unmount(self) -> None:
        await self.client.close()

    def send(self, event: Event) -> None:
        """Dispatch in a worker so the page stays responsive while it waits."""
        self.run_worker(self.controller.dispatch(event), group="dispatch")

    async def confirm(self, prompt: str) -> bool:
        answer: asyncio.Future = asyncio.get_running_loop().create_future()
        self.push_screen(ConfirmScreen(prompt), callback=answer.set_result)
        return await answer

    def render_state(self, state: ViewState) -> None:
        """Bring every widget in line with the state."""
        message = self.query_one("#message", Static)
        if state.message is None:
            message.set_classes("")
            message.update("")
        else:
            message.set_classes(MESSAGE_CLASSES[state.message.level])
            message.update(state.message.text)

        self._render_search(state)
        self._render_form(state)
        self._render_table(state)

    def _render_search(self, state: ViewState) -> None:
        search_text = self.query_one("#search-text", Input)
        search_text.placeholder = f"Enter {state.search.mode.value}"
        if not self._typing and search_text.value != state.search.text:
            search_text.value = state.search.text

        if state.known_statuses != self._shown_statuses:
            self._shown_statuses = state.known_statuses
            self.query_one("#status-filter", Select).set_options(
                status_options(state.known_statuses)
            )

    def _render_form(self, state: ViewState) -> None:
        if not self._typing:
            for widget_id, name in FORM_INPUTS.items():
                widget = self.query_one(f"#{widget_id}", Input)
                value = getattr(state.form, name)
                if widget.value != value:
                    widget.value = value

        status = self.query_one("#status-input", Select)
        if status.value != state.form.status.value:
            status.value = state.form.status.value

        self.query_one("#submit", Button).label = (
            "Update Task" if state.editing else "Add Task"
        )
        self.query_one("#cancel-edit", Button).set_class(state.editing, "visible")

    def _render_table(self, state: ViewState) -> None:
        if state.tasks is self._shown_tasks:
            return
        self._shown_tasks = state.tasks
        table = self.query_one("#tasks", DataTable)
        table.clear()
        if not state.tasks:
            table.add_row("", "No tasks found", "", "", "", "")
            return
        for task in state.tasks:
            table.add_row(*task_row(task), key=str(task.id))

    async def _type(self, event: Event) -> None:
        self._typing = True
        try:
            await self.controller.dispatch(event)
        finally:
            self._typing = False

    def _selected_task(self) -> Optional[Task]:
        tasks = self.controller.state.tasks
        row = self.query_one("#tasks", DataTable).cursor_row
        if 0 <= row < len(tasks):
            return tasks[row]
        return None

    @on(Input.Changed, "#title-input, #description-input, #deadline-input")
    async def handle_form_input(self, event: Input.Changed) -> None:
        name = FORM_INPUTS[event.input.id]
        if getattr(self.controller.state.form, name) != event.value:
            await self._type(SetFormField(name, event.value))

    @on(Select.Changed, "#status-input")
    async def handle_form_status(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        if event.value != self.controller.state.form.status.value:
            await self.controller.dispatch(SetFormField("status", event.value))

    @on(Input.Submitted, "#title-input, #description-input, #deadline-input")
    @on(Button.Pressed, "#submit")
    def handle_submit(self) -> None:
        self.send(SubmitForm())

    @on(Button.Pressed, "#cancel-edit")
    def handle_cancel_edit(self) -> None:
        self.action_cancel_edit()

    @on(Select.Changed, "#search-mode")
    async def handle_search_mode(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        if event.value != self.controller.state.search.mode.value:
            await self.controller.dispatch(SetSearchMode(event.value))

    @on(Input.Changed, "#search-text")
    async def handle_search_text(self, event: Input.Changed) -> None:
        if event.value != self.controller.state.search.text:
            await self._type(SetSearchText(event.value))

    @on(Input.Submitted, "#search-text")
    @on(Button.Pressed, "#search")
    def handle_search(self) -> None:
        self.send(SubmitSearch())

    @on(Button.Pressed, "#reset")
    def handle_reset(self) -> None:
        self.send(ResetSearch())

    @on(Select.Changed, "#status-filter")
    def handle_status_filter(self, event: Select.Changed) -> None:
        if event.value is not Select.BLANK:
            self.send(SelectStatusFilter(str(event.value)))

    @on(DataTable.RowSelected, "#tasks")
    def handle_row_selected(self) -> None:
        self.action_edit_selected()

    def action_reload(self) -> None:
        self.send(LoadTasks())

    def action_edit_selected(self) -> None:
        task = self._selected_task()
        if task is not None:
            self.send(EditTask(task))

    def action_delete_selected(self) -> None:
        task = self._selected_task()
        if task is not None:
            self.send(RequestDelete(task.id))

    def action_cancel_edit(self) -> None:
        if self.controller.state.editing:
            self.send(CancelEdit())
