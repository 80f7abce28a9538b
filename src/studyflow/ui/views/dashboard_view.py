import flet as ft

from studyflow.core.due_dates import days_until, due_label
from studyflow.core.models import Task
from studyflow.core.priority import priority_badge
from studyflow.services.firestore_service import FirestoreServiceError
from studyflow.state.app_state import AppState
from studyflow.state.dashboard_state import DashboardState
from studyflow.ui.layout import Screen, build_layout
from studyflow.ui.notify import report_failure, report_unexpected, toast
from studyflow.ui.theme import badge, spinner, subject_color


def _stat_card(label: str, value: int, icon, color) -> ft.Control:
    return ft.Card(
        content=ft.Container(
            padding=16,
            width=200,
            content=ft.Row(
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                controls=[
                    ft.Column(
                        controls=[
                            ft.Text(label),
                            ft.Text(str(value), size=24, weight=ft.FontWeight.BOLD, color=color),
                        ]
                    ),
                    ft.Icon(icon, color=color, size=32),
                ],
            ),
        )
    )


def build_dashboard_view(page: ft.Page, app_state: AppState) -> Screen:
    state = DashboardState(app_state.data, app_state.uid or "")
    greeting = app_state.session.display_name or "Student"

    stats_row = ft.Row(wrap=True)
    upcoming_column = ft.Column(spacing=8, controls=[spinner()])
    progress_column = ft.Column(spacing=8)

    def upcoming_card(task: Task) -> ft.Control:
        variant, label = priority_badge(task.priority)
        when = due_label(days_until(task.due_date)) if task.due_date else "-"

        def on_complete(_):
            try:
                state.mark_complete(task)
                toast(page, "Task completed. Nice progress!")
            except FirestoreServiceError as exc:
                report_failure(page, "Complete task", exc)
            load()

        return ft.Card(
            content=ft.Container(
                padding=10,
                content=ft.Row(
                    controls=[
                        ft.Column(
                            expand=True,
                            controls=[
                                ft.Row(controls=[ft.Text(task.title, weight=ft.FontWeight.BOLD), badge(label, variant)]),
                                ft.Text(f"{task.subject or '-'} · {when}"),
                                ft.Text(task.description),
                            ],
                        ),
                        ft.OutlinedButton("Done", icon=ft.Icons.CHECK, on_click=on_complete),
                    ]
                ),
            )
        )

    def render() -> None:
        stats = state.stats
        stats_row.controls = [
            _stat_card("Total", stats.total_tasks, ft.Icons.TRACK_CHANGES, ft.Colors.BLUE_400),
            _stat_card("Completed", stats.completed_tasks, ft.Icons.CHECK_CIRCLE, ft.Colors.GREEN_400),
            _stat_card("Pending", stats.pending_tasks, ft.Icons.SCHEDULE, ft.Colors.AMBER_600),
            _stat_card("Overdue", stats.overdue_tasks, ft.Icons.ERROR, ft.Colors.RED_400),
        ]

        upcoming = state.upcoming()
        upcoming_column.controls = [upcoming_card(task) for task in upcoming] or [
            ft.Text("No pending tasks. Enjoy the break!")
        ]

        rows = state.subject_progress()
        progress_column.controls = [
            ft.Text(f"Completion: {state.completion}%"),
            ft.ProgressBar(value=state.completion / 100),
            ft.Text(f"{stats.completed_tasks} of {stats.total_tasks} tasks completed"),
            ft.Divider(),
            ft.Text("Active subjects", size=18, weight=ft.FontWeight.BOLD),
        ]
        if not rows:
            progress_column.controls.append(ft.Text("No subjects yet."))
        for row in rows:
            progress_column.controls.append(
                ft.Column(
                    spacing=2,
                    controls=[
                        ft.Text(f"{row.subject.name} ({row.completed}/{row.total})"),
                        ft.ProgressBar(value=row.percentage / 100, color=subject_color(row.subject.color)),
                    ],
                )
            )
        page.update()

    def load() -> None:
        try:
            state.load()
        except FirestoreServiceError as exc:
            report_failure(page, "Load dashboard", exc)
        except Exception as exc:
            report_unexpected(page, "load dashboard", exc)
        render()

    view = build_layout(
        page,
        app_state,
        "/dashboard",
        "Dashboard",
        [
            ft.Row(
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                controls=[
                    ft.Column(
                        controls=[
                            ft.Text(f"Hello, {greeting}!", size=26, weight=ft.FontWeight.BOLD),
                            ft.Text("Let's organise your studies today."),
                        ]
                    ),
                    ft.Row(
                        controls=[
                            ft.Button("New Task", icon=ft.Icons.ADD, on_click=lambda _: page.go("/tasks")),
                            ft.OutlinedButton("Refresh", on_click=lambda _: load()),
                        ]
                    ),
                ],
            ),
            stats_row,
            ft.Divider(),
            ft.Row(
                vertical_alignment=ft.CrossAxisAlignment.START,
                controls=[
                    ft.Column(
                        expand=2,
                        controls=[
                            ft.Text("Upcoming tasks", size=20, weight=ft.FontWeight.BOLD),
                            upcoming_column,
                        ],
                    ),
                    ft.Column(
                        expand=1,
                        controls=[
                            ft.Text("Overall progress", size=20, weight=ft.FontWeight.BOLD),
                            progress_column,
                        ],
                    ),
                ],
            ),
        ],
    )
    return Screen(view, on_load=load)
