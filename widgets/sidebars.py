from __future__ import annotations

import re

from django.utils.text import slugify

from .registry import Sidebar, SiteRegistry

_NON_ALNUM_RE = re.compile(r"[^0-9A-Za-z]+")


def _slug(value) -> str:
    return slugify(_NON_ALNUM_RE.sub("-", str(value)))


def _as_index(key) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key >= 0 else None
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


def resolve_sidebar(registry: SiteRegistry, key) -> Sidebar | None:
    """Find a sidebar by numeric index, display name or id."""
    if key is None:
        return None

    index = _as_index(key)
    if index is not None:
        sidebar = registry.get_sidebar(f"sidebar-{index}")
        if sidebar is not None:
            return sidebar

    slug = _slug(key)
    if index is None and slug:
        for sidebar in registry.get_sidebars():
            if _slug(sidebar.name) == slug:
                return sidebar

    for sidebar in registry.get_sidebars():
        if sidebar.id in (str(key), slug):
            return sidebar
    return None


def sidebar_exists(registry: SiteRegistry, key) -> bool:
    return resolve_sidebar(registry, key) is not None
