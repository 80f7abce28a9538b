import flet as ft

from studyflow.core.models import SUBJECT_COLORS, Subject
from studyflow.services.firestore_service import FirestoreServiceError
from studyflow.state.app_state import AppState
from studyflow.state.forms import FormError
from studyflow.state.subject_board import SubjectBoard
from studyflow.ui.layout import Screen, build_layout
from studyflow.ui.notify import report_failure, report_unexpected, toast
from studyflow.ui.theme import spinner, subject_color


def build_subjects_view(page: ft.Page, app_state: AppState) -> Screen:
    board = SubjectBoard(app_state.data, app_state.uid or "")

    search = ft.TextField(label="Search subjects", prefix_icon=ft.Icons.SEARCH, width=360)
    list_column = ft.Column(spacing=8, controls=[spinner()])

    name = ft.TextField(label="Subject Name", hint_text="e.g. Mathematics", width=400)
    description = ft.TextField(label="Description", width=400, multiline=True, min_lines=2, max_lines=4)
    teacher = ft.TextField(label="Teacher (optional)", width=400)
    color = ft.Dropdown(
        width=200,
        label="Color",
        options=[ft.dropdown.Option(key, key.capitalize()) for key in SUBJECT_COLORS],
    )
    form_error = ft.Text(color=ft.Colors.RED_400)
    dialog_title = ft.Text()

    def subject_card(subject: Subject, progress) -> ft.Control:
        total = progress.total if progress else 0
        completed = progress.completed if progress else 0
        percentage = progress.percentage if progress else 0

        def on_edit(_):
            board.open_edit(subject)
            open_dialog()

        def on_delete(_):
            try:
                board.delete(subject)
                toast(page, "Subject removed.")
            except FirestoreServiceError as exc:
                report_failure(page, "Delete subject", exc)
            load()

        return ft.Card(
            content=ft.Container(
                padding=12,
                content=ft.Column(
                    controls=[
                        ft.Row(
                            controls=[
                                ft.Container(width=14, height=14, border_radius=7, bgcolor=subject_color(subject.color)),
                                ft.Text(subject.name or "Unnamed Subject", weight=ft.FontWeight.BOLD, expand=True),
                                ft.IconButton(icon=ft.Icons.EDIT, tooltip="Edit", on_click=on_edit),
                                ft.IconButton(icon=ft.Icons.DELETE, tooltip="Delete", on_click=on_delete),
                            ]
                        ),
                        ft.Text(subject.description),
                        ft.Text(f"Teacher: {subject.teacher or '-'}"),
                        ft.Text(f"{completed} of {total} tasks completed ({percentage}%)"),
                        ft.ProgressBar(value=percentage / 100, color=subject_color(subject.color)),
                    ]
                ),
            )
        )

    def render() -> None:
        list_column.controls.clear()
        visible = board.visible_subjects()
        if not visible:
            list_column.controls.append(ft.Text(board.empty_message()))
        progress = board.progress()
        for subject in visible:
            list_column.controls.append(subject_card(subject, progress.get(subject.id)))
        page.update()

    def load() -> None:
        try:
            board.load()
        except FirestoreServiceError as exc:
            report_failure(page, "Load subjects", exc)
        except Exception as exc:
            report_unexpected(page, "load subjects", exc)
        render()

    def on_search(_):
        board.search = search.value or ""
        render()

    search.on_change = on_search

    def close_dialog(_=None):
        board.close_dialog()
        dialog.open = False
        page.update()

    def on_submit(_):
        board.form.name = name.value or ""
        board.form.description = description.value or ""
        board.form.teacher = teacher.value or ""
        board.form.color = color.value or "blue"
        try:
            message = board.submit()
        except FormError as exc:
            form_error.value = str(exc)
            page.update()
            return
        except FirestoreServiceError as exc:
            report_failure(page, "Save subject", exc)
            return
        except Exception as exc:
            report_unexpected(page, "save subject", exc)
            return
        dialog.open = False
        toast(page, message)
        render()

    dialog = ft.AlertDialog(
        modal=True,
        title=dialog_title,
        content=ft.Column(tight=True, controls=[name, description, teacher, color, form_error]),
        actions=[
            ft.TextButton("Cancel", on_click=close_dialog),
            ft.Button("Save", on_click=on_submit),
        ],
    )
    page.overlay.append(dialog)

    def open_dialog() -> None:
        form = board.form
        dialog_title.value = "Edit Subject" if board.editing else "New Subject"
        name.value = form.name
        description.value = form.description
        teacher.value = form.teacher
        color.value = form.color
        form_error.value = ""
        dialog.open = True
        page.update()

    def on_new(_):
        board.open_create()
        open_dialog()

    view = build_layout(
        page,
        app_state,
        "/subjects",
        "Subjects",
        [
            ft.Row(
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                controls=[
                    ft.Column(
                        controls=[
                            ft.Text("Subjects", size=26, weight=ft.FontWeight.BOLD),
                            ft.Text("Organise your courses and follow their progress."),
                        ]
                    ),
                    ft.Button("New Subject", icon=ft.Icons.ADD, on_click=on_new),
                ],
            ),
            search,
            ft.Divider(),
            list_column,
        ],
    )
    return Screen(view, on_load=load)
