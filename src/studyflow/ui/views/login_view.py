import flet as ft

from studyflow.services.auth_service import AuthServiceError
from studyflow.state.app_state import AppState
from studyflow.ui.notify import report_failure, report_unexpected, toast


def build_login_view(page: ft.Page, app_state: AppState, route: str = "/login") -> ft.View:
    email = ft.TextField(label="Email", width=350)
    password = ft.TextField(label="Password", password=True, can_reveal_password=True, width=350)
    status_text = ft.Text(color=ft.Colors.RED_400)

    def set_status(message: str) -> None:
        status_text.value = message
        page.update()

    def on_sign_in(_):
        if not email.value or not password.value:
            set_status("Email and password are required.")
            return

        try:
            # The auth listener at the root routes to the dashboard.
            app_state.auth.login(email.value.strip(), password.value)
        except AuthServiceError as exc:
            report_failure(page, "Sign in", exc)
        except Exception as exc:
            report_unexpected(page, "sign in", exc)

    notice = app_state.take_notice()
    if notice:
        toast(page, notice)

    return ft.View(
        route=route,
        controls=[
            ft.AppBar(title=ft.Text("StudyFlow - Login")),
            ft.Container(
                alignment=ft.Alignment.CENTER,
                padding=20,
                content=ft.Column(
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    controls=[
                        ft.Text("Welcome to StudyFlow", size=30, weight=ft.FontWeight.BOLD),
                        ft.Text("Sign in to organise your studies."),
                        email,
                        password,
                        ft.Row(
                            alignment=ft.MainAxisAlignment.CENTER,
                            controls=[
                                ft.Button("Sign In", on_click=on_sign_in),
                                ft.TextButton("Create an account", on_click=lambda _: page.go("/register")),
                            ],
                        ),
                        status_text,
                    ],
                ),
            ),
        ],
    )
