import flet as ft

from studyflow.core.due_dates import due_soon_badge, format_due_date
from studyflow.core.filters import ALL
from studyflow.core.models import PRIORITIES, Task
from studyflow.core.priority import priority_badge
from studyflow.services.firestore_service import FirestoreServiceError
from studyflow.state.app_state import AppState
from studyflow.state.forms import FormError
from studyflow.state.task_board import TaskBoard
from studyflow.ui.layout import Screen, build_layout
from studyflow.ui.notify import report_failure, report_unexpected, toast
from studyflow.ui.theme import badge, spinner


def build_tasks_view(page: ft.Page, app_state: AppState) -> Screen:
    board = TaskBoard(app_state.data, app_state.uid or "")

    search = ft.TextField(label="Search tasks", prefix_icon=ft.Icons.SEARCH, width=320)
    subject_filter = ft.Dropdown(width=220, label="Subject", value=ALL)
    status_filter = ft.Dropdown(
        width=160,
        label="Status",
        value=ALL,
        options=[
            ft.dropdown.Option(ALL, "All"),
            ft.dropdown.Option("pending", "Pending"),
            ft.dropdown.Option("completed", "Completed"),
        ],
    )
    priority_filter = ft.Dropdown(
        width=160,
        label="Priority",
        value=ALL,
        options=[
            ft.dropdown.Option(ALL, "All"),
            ft.dropdown.Option("high", "High"),
            ft.dropdown.Option("medium", "Medium"),
            ft.dropdown.Option("low", "Low"),
        ],
    )
    task_list = ft.Column(spacing=8, controls=[spinner()])

    title = ft.TextField(label="Task Title", hint_text="e.g. Math Exam", width=400)
    description = ft.TextField(label="Description", width=400, multiline=True, min_lines=2, max_lines=4)
    subject = ft.Dropdown(width=400, label="Subject")
    due_date = ft.TextField(label="Due date (YYYY-MM-DD)", width=200)
    priority = ft.Dropdown(
        width=180,
        label="Priority",
        options=[ft.dropdown.Option(value, value.capitalize()) for value in PRIORITIES],
    )
    form_error = ft.Text(color=ft.Colors.RED_400)
    dialog_title = ft.Text()
    submit_button = ft.Button("Save")

    def refresh_subject_options() -> None:
        options = [ft.dropdown.Option(s.id, s.name) for s in board.subjects]
        subject.options = [ft.dropdown.Option("", "No subject"), *options]
        subject_filter.options = [ft.dropdown.Option(ALL, "All subjects"), *options]
        if subject_filter.value != ALL and all(opt.key != subject_filter.value for opt in options):
            subject_filter.value = ALL
            board.filters.subject_id = ALL

    def task_card(task: Task) -> ft.Control:
        variant, label = priority_badge(task.priority)
        badges = [badge(label, variant)]
        soon = due_soon_badge(task)
        if soon:
            badges.append(badge(soon, "destructive" if soon in ("Overdue", "Due today") else "secondary"))

        def on_toggle(_):
            try:
                completed = board.toggle(task)
                toast(page, TaskBoard.toggle_message(completed))
            except FirestoreServiceError as exc:
                report_failure(page, "Update task", exc)
            load()

        def on_edit(_):
            board.open_edit(task)
            open_dialog()

        def on_delete(_):
            try:
                board.delete(task)
                toast(page, "Task removed.")
            except FirestoreServiceError as exc:
                report_failure(page, "Delete task", exc)
            load()

        return ft.Card(
            content=ft.Container(
                padding=12,
                opacity=0.75 if task.completed else 1.0,
                content=ft.Row(
                    vertical_alignment=ft.CrossAxisAlignment.START,
                    controls=[
                        ft.Checkbox(value=task.completed, on_change=on_toggle),
                        ft.Column(
                            expand=True,
                            controls=[
                                ft.Text(
                                    task.title or "Untitled Task",
                                    weight=ft.FontWeight.BOLD,
                                    style=ft.TextStyle(
                                        decoration=ft.TextDecoration.LINE_THROUGH if task.completed else None
                                    ),
                                ),
                                ft.Text(task.description),
                                ft.Row(
                                    wrap=True,
                                    controls=[
                                        ft.Text(f"Subject: {task.subject or '-'}"),
                                        ft.Text(f"Due: {format_due_date(task.due_date)}"),
                                        *badges,
                                    ],
                                ),
                            ],
                        ),
                        ft.IconButton(icon=ft.Icons.EDIT, tooltip="Edit", on_click=on_edit),
                        ft.IconButton(icon=ft.Icons.DELETE, tooltip="Delete", on_click=on_delete),
                    ],
                ),
            )
        )

    def render() -> None:
        task_list.controls.clear()
        visible = board.visible_tasks()
        if not visible:
            task_list.controls.append(ft.Text(board.empty_message()))
        for task in visible:
            task_list.controls.append(task_card(task))
        page.update()

    def load() -> None:
        try:
            board.load()
        except FirestoreServiceError as exc:
            report_failure(page, "Load tasks", exc)
        except Exception as exc:
            report_unexpected(page, "load tasks", exc)
        refresh_subject_options()
        render()

    def on_filter_change(_):
        board.filters.search = search.value or ""
        board.filters.subject_id = subject_filter.value or ALL
        board.filters.status = status_filter.value or ALL
        board.filters.priority = priority_filter.value or ALL
        render()

    for control in (search, subject_filter, status_filter, priority_filter):
        control.on_change = on_filter_change

    def close_dialog(_=None):
        board.close_dialog()
        dialog.open = False
        page.update()

    def on_submit(_):
        board.form.title = title.value or ""
        board.form.description = description.value or ""
        board.form.subject_id = subject.value or ""
        board.form.due_date = due_date.value or ""
        board.form.priority = priority.value or "medium"
        try:
            message = board.submit()
        except FormError as exc:
            form_error.value = str(exc)
            page.update()
            return
        except FirestoreServiceError as exc:
            report_failure(page, "Save task", exc)
            return
        except Exception as exc:
            report_unexpected(page, "save task", exc)
            return
        dialog.open = False
        toast(page, message)
        refresh_subject_options()
        render()

    submit_button.on_click = on_submit

    dialog = ft.AlertDialog(
        modal=True,
        title=dialog_title,
        content=ft.Column(
            tight=True,
            controls=[title, description, subject, ft.Row(controls=[due_date, priority]), form_error],
        ),
        actions=[
            ft.TextButton("Cancel", on_click=close_dialog),
            submit_button,
        ],
    )
    page.overlay.append(dialog)

    def open_dialog() -> None:
        form = board.form
        dialog_title.value = "Edit Task" if board.editing else "New Task"
        title.value = form.title
        description.value = form.description
        subject.value = form.subject_id
        due_date.value = form.due_date
        priority.value = form.priority
        form_error.value = ""
        dialog.open = True
        page.update()

    def on_new(_):
        board.open_create()
        open_dialog()

    view = build_layout(
        page,
        app_state,
        "/tasks",
        "Tasks",
        [
            ft.Row(
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                controls=[
                    ft.Column(
                        controls=[
                            ft.Text("Tasks", size=26, weight=ft.FontWeight.BOLD),
                            ft.Text("Manage your activities and track your progress."),
                        ]
                    ),
                    ft.Button("New Task", icon=ft.Icons.ADD, on_click=on_new),
                ],
            ),
            ft.Row(wrap=True, controls=[search, subject_filter, status_filter, priority_filter]),
            ft.Divider(),
            task_list,
        ],
    )
    return Screen(view, on_load=load)
