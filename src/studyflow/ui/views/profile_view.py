import flet as ft

from studyflow.services.auth_service import AuthServiceError
from studyflow.services.firestore_service import FirestoreServiceError
from studyflow.state.app_state import AppState
from studyflow.state.profile_state import ProfileState
from studyflow.ui.layout import Screen, build_layout
from studyflow.ui.notify import report_failure, report_unexpected, toast
from studyflow.ui.theme import spinner


def build_profile_view(page: ft.Page, app_state: AppState) -> Screen:
    state = ProfileState(app_state.data, app_state.auth)
    session = app_state.session

    display_name = ft.TextField(label="Name", value=session.display_name or "", width=320)
    totals = ft.Row(wrap=True, controls=[spinner()])

    def _total(label: str, value: int) -> ft.Control:
        return ft.Card(
            content=ft.Container(
                padding=16,
                width=180,
                content=ft.Column(
                    controls=[ft.Text(label), ft.Text(str(value), size=24, weight=ft.FontWeight.BOLD)]
                ),
            )
        )

    def render() -> None:
        totals.controls = [
            _total("Total tasks", len(state.tasks)),
            _total("Completed", len(state.completed_tasks)),
            _total("Pending", len(state.pending_tasks)),
            _total("Subjects", len(state.subjects)),
        ]
        page.update()

    def load() -> None:
        try:
            state.load()
        except FirestoreServiceError as exc:
            report_failure(page, "Load profile", exc)
        except Exception as exc:
            report_unexpected(page, "load profile", exc)
        render()

    def on_rename(_):
        if not (display_name.value or "").strip():
            toast(page, "Name cannot be empty.", is_error=True)
            return
        try:
            state.rename(display_name.value)
            toast(page, "Profile updated.")
        except AuthServiceError as exc:
            report_failure(page, "Update profile", exc)

    def close_confirm(_=None):
        confirm.open = False
        page.update()

    def on_confirm_delete(_):
        confirm.open = False
        try:
            # Success clears the session; the root auth listener routes to /login.
            app_state.notice = "Your account and all its data were removed."
            state.delete_account()
        except (AuthServiceError, FirestoreServiceError) as exc:
            app_state.notice = None
            report_failure(page, "Delete account", exc)
        except Exception as exc:
            app_state.notice = None
            report_unexpected(page, "delete account", exc)

    confirm = ft.AlertDialog(
        modal=True,
        title=ft.Text("Delete account?"),
        content=ft.Text(
            "This permanently removes your subjects, your tasks and your account. "
            "This cannot be undone."
        ),
        actions=[
            ft.TextButton("Cancel", on_click=close_confirm),
            ft.Button(
                "Delete",
                bgcolor=ft.Colors.RED_700,
                color=ft.Colors.WHITE,
                on_click=on_confirm_delete,
            ),
        ],
    )
    page.overlay.append(confirm)

    def open_confirm(_):
        confirm.open = True
        page.update()

    view = build_layout(
        page,
        app_state,
        "/profile",
        "Profile",
        [
            ft.Text("Profile", size=26, weight=ft.FontWeight.BOLD),
            ft.Card(
                content=ft.Container(
                    padding=16,
                    content=ft.Column(
                        controls=[
                            ft.Text("Account", size=18, weight=ft.FontWeight.BOLD),
                            ft.Text(f"Name: {session.display_name or 'Not provided'}"),
                            ft.Text(f"Email: {session.email or '-'}"),
                            ft.Row(controls=[display_name, ft.Button("Save name", on_click=on_rename)]),
                        ]
                    ),
                )
            ),
            totals,
            ft.Divider(),
            ft.Text("Danger zone", size=18, weight=ft.FontWeight.BOLD, color=ft.Colors.RED_400),
            ft.Text("Deleting your account removes every subject and task you created."),
            ft.OutlinedButton("Delete account", icon=ft.Icons.DELETE_FOREVER, on_click=open_confirm),
        ],
    )
    return Screen(view, on_load=load)
