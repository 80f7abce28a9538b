import flet as ft

from studyflow.services.auth_service import AuthServiceError
from studyflow.state.app_state import AppState
from studyflow.ui.notify import report_failure, report_unexpected


MIN_PASSWORD_LENGTH = 6


def build_register_view(page: ft.Page, app_state: AppState) -> ft.View:
    display_name = ft.TextField(label="Name", width=350)
    email = ft.TextField(label="Email", width=350)
    password = ft.TextField(label="Password", password=True, can_reveal_password=True, width=350)
    confirm = ft.TextField(label="Confirm Password", password=True, can_reveal_password=True, width=350)
    status_text = ft.Text(color=ft.Colors.RED_400)

    def set_status(message: str) -> None:
        status_text.value = message
        page.update()

    def on_sign_up(_):
        if not display_name.value or not email.value or not password.value:
            set_status("Name, email and password are required.")
            return
        if len(password.value) < MIN_PASSWORD_LENGTH:
            set_status(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
            return
        if password.value != confirm.value:
            set_status("Passwords do not match.")
            return

        try:
            app_state.auth.register(email.value.strip(), password.value, display_name.value.strip())
        except AuthServiceError as exc:
            report_failure(page, "Sign up", exc)
        except Exception as exc:
            report_unexpected(page, "sign up", exc)

    return ft.View(
        route="/register",
        controls=[
            ft.AppBar(title=ft.Text("StudyFlow - Register")),
            ft.Container(
                alignment=ft.Alignment.CENTER,
                padding=20,
                content=ft.Column(
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    controls=[
                        ft.Text("Create your account", size=30, weight=ft.FontWeight.BOLD),
                        display_name,
                        email,
                        password,
                        confirm,
                        ft.Row(
                            alignment=ft.MainAxisAlignment.CENTER,
                            controls=[
                                ft.Button("Sign Up", on_click=on_sign_up),
                                ft.TextButton("I already have an account", on_click=lambda _: page.go("/login")),
                            ],
                        ),
                        status_text,
                    ],
                ),
            ),
        ],
    )
