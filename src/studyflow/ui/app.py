import logging
from typing import Callable, Dict

import flet as ft

from studyflow.config.settings import settings
from studyflow.logging_setup import setup_logging
from studyflow.services.auth_service import AuthServiceError, FirebaseAuthService
from studyflow.services.firestore_service import FirestoreService, FirestoreServiceError
from studyflow.state.app_state import AppState
from studyflow.state.auth_provider import AuthProvider
from studyflow.ui.layout import Screen
from studyflow.ui.routes import guard, normalize
from studyflow.ui.views.dashboard_view import build_dashboard_view
from studyflow.ui.views.login_view import build_login_view
from studyflow.ui.views.not_found_view import build_loading_view, build_not_found_view
from studyflow.ui.views.profile_view import build_profile_view
from studyflow.ui.views.register_view import build_register_view
from studyflow.ui.views.subjects_view import build_subjects_view
from studyflow.ui.views.tasks_view import build_tasks_view


logger = logging.getLogger(__name__)

ScreenBuilder = Callable[[ft.Page, AppState], Screen]


def _static(builder) -> ScreenBuilder:
    return lambda page, app_state: Screen(builder(page, app_state))


SCREENS: Dict[str, ScreenBuilder] = {
    "/": _static(lambda page, app_state: build_login_view(page, app_state, route="/")),
    "/login": _static(build_login_view),
    "/register": _static(build_register_view),
    "/dashboard": build_dashboard_view,
    "/subjects": build_subjects_view,
    "/tasks": build_tasks_view,
    "/profile": build_profile_view,
}


def _config_error_view(message: str) -> ft.View:
    return ft.View(
        route="/",
        controls=[
            ft.AppBar(title=ft.Text("StudyFlow")),
            ft.Container(
                padding=20,
                content=ft.Column(
                    controls=[
                        ft.Text("StudyFlow is not configured", size=24, weight=ft.FontWeight.BOLD),
                        ft.Text(message, color=ft.Colors.RED_400),
                        ft.Text("Set FIREBASE_API_KEY and FIREBASE_PROJECT_ID in your environment or .env file."),
                    ]
                ),
            ),
        ],
    )


def main(page: ft.Page) -> None:
    page.title = "StudyFlow"
    page.theme_mode = ft.ThemeMode.LIGHT

    try:
        auth = AuthProvider(FirebaseAuthService.from_settings())
        data = FirestoreService.from_settings()
    except (AuthServiceError, FirestoreServiceError) as exc:
        logger.error("Configuration error: %s", exc)
        page.views.clear()
        page.views.append(_config_error_view(str(exc)))
        page.update()
        return

    app_state = AppState(auth=auth, data=data)

    def show(route: str) -> None:
        path = normalize(route)
        if auth.loading:
            page.views.clear()
            page.views.append(build_loading_view(path))
            page.update()
            return

        redirect = guard(path, auth.user is not None)
        if redirect is not None:
            logger.debug("Redirecting %s -> %s", path, redirect)
            page.go(redirect)
            return

        page.overlay.clear()
        page.views.clear()
        builder = SCREENS.get(path)
        screen = builder(page, app_state) if builder else Screen(build_not_found_view(page, path))
        page.views.append(screen.view)
        page.update()
        if screen.on_load is not None:
            screen.on_load()

    def on_route_change(_):
        show(page.route)

    def on_auth_change(_user) -> None:
        show(page.route)

    page.on_route_change = on_route_change
    # Session context lives for this page only and is dropped on sign-out.
    auth.subscribe(on_auth_change)
    show(page.route)
    auth.start()


def run() -> None:
    setup_logging(settings.log_level)
    ft.app(
        target=main,
        view=ft.AppView.WEB_BROWSER if settings.web_mode else ft.AppView.FLET_APP,
        port=settings.port,
    )
