from typing import Optional


AUTH_ROUTES = ("/", "/login", "/register")
PROTECTED_ROUTES = ("/dashboard", "/subjects", "/tasks", "/profile")
LOGIN_ROUTE = "/login"
HOME_ROUTE = "/dashboard"


def normalize(route: str) -> str:
    path = (route or "/").split("?", maxsplit=1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def is_known(route: str) -> bool:
    path = normalize(route)
    return path in AUTH_ROUTES or path in PROTECTED_ROUTES


def guard(route: str, is_authenticated: bool) -> Optional[str]:
    """Return the route to redirect to, or None when ``route`` may render."""
    path = normalize(route)
    if path in PROTECTED_ROUTES and not is_authenticated:
        return LOGIN_ROUTE
    if path in AUTH_ROUTES and is_authenticated:
        return HOME_ROUTE
    return None
