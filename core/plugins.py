from __future__ import annotations

from abc import ABC, abstractmethod


class BaseWidget(ABC):
    """A widget type whose instances are rendered through a bound object.

    One object is created per placed instance; ``number`` and ``id`` identify
    that instance (``{id_base}-{number}``).
    """

    id_base: str = ""
    name: str = ""
    description: str = ""
    classname: str = ""
    template_name: str = ""
    control_options: dict = {}

    def __init__(self, number: int | None = None):
        self.number = number
        self.id = f"{self.id_base}-{number}" if number is not None else None

    @property
    def option_name(self) -> str:
        return f"widget_{self.id_base}"

    @property
    def widget_options(self) -> dict:
        return {
            "classname": self.classname or f"widget_{self.id_base}",
            "description": self.description,
        }

    @abstractmethod
    def render(self, args: dict, settings: dict, request=None) -> str: ...


class BasePlugin:
    name: str = ""
    label: str = ""
    version: str = "1.0.0"
    description: str = ""

    def get_widget_types(self) -> list[type[BaseWidget]]:
        return []

    def get_widget_callbacks(self) -> list[dict]:
        """Plain callable widgets.

        Each dict: {"id": str, "name": str, "callback": callable,
        "classname": str (optional), "description": str (optional)}
        """
        return []


class PluginRegistry:
    def __init__(self):
        self._plugins: dict[str, BasePlugin] = {}

    def register(self, plugin: BasePlugin) -> None:
        self._plugins[plugin.name] = plugin

    def get_all_widget_types(self) -> list[type[BaseWidget]]:
        types = []
        for plugin in self._plugins.values():
            types.extend(plugin.get_widget_types())
        return types

    def get_widget_type(self, id_base: str) -> type[BaseWidget] | None:
        for cls in self.get_all_widget_types():
            if cls.id_base == id_base:
                return cls
        return None

    def get_widget_callbacks(self) -> list[dict]:
        callbacks = []
        for plugin in self._plugins.values():
            callbacks.extend(plugin.get_widget_callbacks())
        return callbacks


registry = PluginRegistry()
