import flet as ft


def build_not_found_view(page: ft.Page, route: str) -> ft.View:
    return ft.View(
        route=route,
        controls=[
            ft.Container(
                alignment=ft.Alignment.CENTER,
                padding=40,
                content=ft.Column(
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    controls=[
                        ft.Text("404", size=48, weight=ft.FontWeight.BOLD),
                        ft.Text(f"Page not found: {route}"),
                        ft.TextButton("Return to home", on_click=lambda _: page.go("/")),
                    ],
                ),
            )
        ],
    )


def build_loading_view(route: str) -> ft.View:
    return ft.View(
        route=route,
        vertical_alignment=ft.MainAxisAlignment.CENTER,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        controls=[ft.ProgressRing()],
    )
