from typing import Tuple


_BADGES = {
    "high": ("destructive", "High"),
    "medium": ("warning", "Medium"),
}
_FALLBACK = ("secondary", "Low")


def priority_badge(priority: str) -> Tuple[str, str]:
    """Return the (variant, label) pair used to render a priority badge."""
    return _BADGES.get(priority, _FALLBACK)


def priority_variant(priority: str) -> str:
    return priority_badge(priority)[0]


def priority_label(priority: str) -> str:
    return priority_badge(priority)[1]
