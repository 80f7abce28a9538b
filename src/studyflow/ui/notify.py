import logging

import flet as ft


logger = logging.getLogger(__name__)


def toast(page: ft.Page, message: str, is_error: bool = False) -> None:
    snack = ft.SnackBar(
        content=ft.Text(message, color=ft.Colors.WHITE),
        bgcolor=ft.Colors.RED_700 if is_error else ft.Colors.GREEN_700,
        open=True,
    )
    page.overlay.append(snack)
    page.update()


def report_failure(page: ft.Page, action: str, exc: Exception) -> None:
    logger.error("%s failed: %s", action, exc)
    toast(page, f"{action} failed: {exc}", is_error=True)


def report_unexpected(page: ft.Page, action: str, exc: Exception) -> None:
    logger.exception("Unexpected error during %s", action)
    toast(page, f"Unexpected error: {exc}", is_error=True)
