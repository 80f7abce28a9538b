from dataclasses import dataclass
from typing import Callable, List, Optional

import flet as ft

from studyflow.state.app_state import AppState


@dataclass
class Screen:
    """A built view plus the loader the router runs once the view is shown."""

    view: ft.View
    on_load: Optional[Callable[[], None]] = None


NAV_ITEMS = [
    ("/dashboard", "Dashboard", ft.Icons.DASHBOARD),
    ("/subjects", "Subjects", ft.Icons.BOOK),
    ("/tasks", "Tasks", ft.Icons.CHECK_CIRCLE),
    ("/profile", "Profile", ft.Icons.PERSON),
]


def build_layout(
    page: ft.Page,
    app_state: AppState,
    route: str,
    title: str,
    controls: List[ft.Control],
) -> ft.View:
    def nav_button(target: str, label: str, icon) -> ft.Control:
        selected = target == route
        return ft.TextButton(
            label,
            icon=icon,
            disabled=selected,
            on_click=lambda _: page.go(target),
        )

    def on_logout(_):
        app_state.auth.logout()

    name = app_state.session.display_name or app_state.session.email or ""

    return ft.View(
        route=route,
        controls=[
            ft.AppBar(
                title=ft.Text(f"StudyFlow - {title}"),
                actions=[
                    *[nav_button(target, label, icon) for target, label, icon in NAV_ITEMS],
                    ft.Text(name),
                    ft.IconButton(icon=ft.Icons.LOGOUT, tooltip="Logout", on_click=on_logout),
                ],
            ),
            ft.Container(
                padding=20,
                expand=True,
                content=ft.Column(
                    scroll=ft.ScrollMode.AUTO,
                    controls=controls,
                ),
            ),
        ],
    )
