from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from django.core.exceptions import ImproperlyConfigured

from core.plugins import BaseWidget

logger = logging.getLogger(__name__)

DEFAULT_BEFORE_WIDGET = '<li id="%1$s" class="widget %2$s">'
DEFAULT_AFTER_WIDGET = "</li>\n"
DEFAULT_BEFORE_TITLE = '<h2 class="widgettitle">'
DEFAULT_AFTER_TITLE = "</h2>\n"


class WidgetKind(enum.Enum):
    OBJECT = "object"
    CALLBACK = "callback"


@dataclass
class Sidebar:
    id: str
    name: str
    description: str = ""
    class_name: str = ""
    before_widget: str = DEFAULT_BEFORE_WIDGET
    after_widget: str = DEFAULT_AFTER_WIDGET
    before_title: str = DEFAULT_BEFORE_TITLE
    after_title: str = DEFAULT_AFTER_TITLE

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "class": self.class_name,
            "before_widget": self.before_widget,
            "after_widget": self.after_widget,
            "before_title": self.before_title,
            "after_title": self.after_title,
        }

    def layout_args(self) -> dict:
        return {
            "before_widget": self.before_widget,
            "after_widget": self.after_widget,
            "before_title": self.before_title,
            "after_title": self.after_title,
        }


@dataclass
class RegisteredWidget:
    """One entry of the widget registry, keyed by instance id."""

    id: str
    name: str
    kind: WidgetKind
    callback: Callable[..., Any]
    params: list = field(default_factory=list)
    classname: Any = ""
    description: str = ""
    settings: dict = field(default_factory=dict)
    widget: Optional[BaseWidget] = None

    @property
    def is_object(self) -> bool:
        return self.kind is WidgetKind.OBJECT

    @property
    def id_base(self) -> str:
        if self.widget is not None:
            return self.widget.id_base
        return self.id

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "callback": self.callback,
            "params": list(self.params),
            "classname": self.classname,
            "description": self.description,
        }


class SiteRegistry:
    """Registered sidebars, registered widgets and their placements."""

    def __init__(self):
        self._sidebars: dict[str, Sidebar] = {}
        self._widgets: dict[str, RegisteredWidget] = {}
        self._placements: dict[str, list[str]] = {}

    def register_sidebar(self, **options) -> Sidebar:
        position = len(self._sidebars) + 1
        sidebar_id = str(options.pop("id", "") or f"sidebar-{position}")
        if sidebar_id in self._sidebars:
            raise ImproperlyConfigured(f"Sidebar '{sidebar_id}' is registered twice.")
        if "class" in options:
            options["class_name"] = options.pop("class")
        options.setdefault("name", f"Sidebar {position}")
        sidebar = Sidebar(id=sidebar_id, **options)
        self._sidebars[sidebar_id] = sidebar
        self._placements.setdefault(sidebar_id, [])
        return sidebar

    def register_widget(
        self, widget_cls: type[BaseWidget], number: int, settings: dict | None = None
    ) -> RegisteredWidget:
        widget = widget_cls(number)
        entry = RegisteredWidget(
            id=widget.id,
            name=widget.name,
            kind=WidgetKind.OBJECT,
            callback=widget.render,
            params=[{"number": number}],
            classname=widget.widget_options["classname"],
            description=widget.description,
            settings=dict(settings or {}),
            widget=widget,
        )
        self._widgets[entry.id] = entry
        return entry

    def register_callback(
        self,
        id: str,
        name: str,
        callback: Callable[..., Any],
        classname: Any = "",
        description: str = "",
        settings: dict | None = None,
    ) -> RegisteredWidget:
        entry = RegisteredWidget(
            id=id,
            name=name,
            kind=WidgetKind.CALLBACK,
            callback=callback,
            classname=classname or f"widget_{id}",
            description=description,
            settings=dict(settings or {}),
        )
        self._widgets[id] = entry
        return entry

    def place(self, sidebar_id: str, instance_id: str) -> None:
        self._placements.setdefault(sidebar_id, []).append(instance_id)

    def get_sidebars(self) -> list[Sidebar]:
        return list(self._sidebars.values())

    def get_sidebar(self, sidebar_id: str) -> Sidebar | None:
        return self._sidebars.get(sidebar_id)

    def get_widgets(self) -> list[RegisteredWidget]:
        return list(self._widgets.values())

    def get_widget(self, instance_id: str) -> RegisteredWidget | None:
        return self._widgets.get(instance_id)

    def sidebars_widgets(self) -> dict[str, list[str]]:
        return {sidebar_id: list(ids) for sidebar_id, ids in self._placements.items()}

    def placed_widgets(self, sidebar_id: str) -> list[str]:
        return list(self._placements.get(sidebar_id, []))


def build_site_registry(plugin_registry=None) -> SiteRegistry:
    """Build the registries from ``settings.SIDEBARS``, ``settings.WIDGET_INSTANCES``
    and the widget types contributed by installed plugins."""
    from django.conf import settings

    if plugin_registry is None:
        from core.plugins import registry as plugin_registry

    site = SiteRegistry()

    instances = getattr(settings, "WIDGET_INSTANCES", {}) or {}
    for id_base, numbered in instances.items():
        widget_cls = plugin_registry.get_widget_type(id_base)
        if widget_cls is None:
            logger.warning("No widget type registered for id_base %s", id_base)
            continue
        for number, widget_settings in (numbered or {}).items():
            site.register_widget(widget_cls, int(number), widget_settings)

    for item in plugin_registry.get_widget_callbacks():
        site.register_callback(
            item["id"],
            item.get("name", item["id"]),
            item["callback"],
            classname=item.get("classname", ""),
            description=item.get("description", ""),
        )

    for options in getattr(settings, "SIDEBARS", []) or []:
        if not isinstance(options, dict):
            raise ImproperlyConfigured("Each SIDEBARS entry must be a dict.")
        options = dict(options)
        placed = options.pop("widgets", []) or []
        sidebar = site.register_sidebar(**options)
        for instance_id in placed:
            if site.get_widget(instance_id) is None:
                logger.warning(
                    "Sidebar %s places unknown widget %s", sidebar.id, instance_id
                )
            site.place(sidebar.id, instance_id)

    return site
