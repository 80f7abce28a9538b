import flet as ft


BADGE_COLORS = {
    "destructive": ft.Colors.RED_400,
    "warning": ft.Colors.AMBER_600,
    "secondary": ft.Colors.BLUE_GREY_400,
}

SUBJECT_COLORS = {
    "blue": ft.Colors.BLUE_500,
    "green": ft.Colors.GREEN_500,
    "purple": ft.Colors.PURPLE_500,
    "orange": ft.Colors.ORANGE_500,
    "pink": ft.Colors.PINK_500,
    "indigo": ft.Colors.INDIGO_500,
    "red": ft.Colors.RED_500,
    "yellow": ft.Colors.YELLOW_600,
}


def badge(text: str, variant: str) -> ft.Container:
    return ft.Container(
        content=ft.Text(text, size=12, color=ft.Colors.WHITE, weight=ft.FontWeight.BOLD),
        bgcolor=BADGE_COLORS.get(variant, BADGE_COLORS["secondary"]),
        padding=ft.padding.symmetric(horizontal=8, vertical=2),
        border_radius=10,
    )


def subject_color(key: str) -> str:
    return SUBJECT_COLORS.get(key, SUBJECT_COLORS["blue"])


def spinner() -> ft.Container:
    return ft.Container(
        alignment=ft.Alignment.CENTER,
        padding=40,
        content=ft.ProgressRing(),
    )
