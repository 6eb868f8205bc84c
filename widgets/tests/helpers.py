from unittest.mock import patch

from core.plugins import BasePlugin, BaseWidget, PluginRegistry
from widgets.registry import SiteRegistry


class SearchBoxWidget(BaseWidget):
    id_base = "search"
    name = "Search"
    description = "Search box"

    def render(self, args, settings, request=None):
        print("<div>search box</div>", end="")


class NoteWidget(BaseWidget):
    id_base = "note"
    name = "Note"

    def render(self, args, settings, request=None):
        return f"<p>{settings.get('text', '')}</p>"


class ExplodingWidget(BaseWidget):
    id_base = "boom"
    name = "Boom"

    def render(self, args, settings, request=None):
        print("partial", end="")
        raise RuntimeError("boom")


def legacy_callback(args, settings):
    print("<em>legacy</em>", end="")


class FixturePlugin(BasePlugin):
    name = "fixtures"

    def get_widget_types(self):
        return [SearchBoxWidget, NoteWidget, ExplodingWidget]

    def get_widget_callbacks(self):
        return [{"id": "legacy", "name": "Legacy", "callback": legacy_callback}]


def fixture_plugins() -> PluginRegistry:
    plugins = PluginRegistry()
    plugins.register(FixturePlugin())
    return plugins


def use_fixture_plugins():
    return patch("core.plugins.registry", fixture_plugins())


FIXTURE_SIDEBARS = [
    {
        "id": "primary",
        "name": "Primary Sidebar",
        "before_widget": '<div id="%1$s" class="widget %2$s">',
        "after_widget": "</div>",
        "widgets": ["search-2"],
    },
    {
        "id": "footer",
        "name": "Footer",
        "widgets": ["search-5", "note-3", "gone-9"],
    },
]

FIXTURE_INSTANCES = {
    "search": {2: {}, 5: {}},
    "note": {3: {"text": "hello"}},
}


def make_site() -> SiteRegistry:
    site = SiteRegistry()
    site.register_widget(SearchBoxWidget, 2)
    site.register_widget(SearchBoxWidget, 5)
    site.register_widget(NoteWidget, 3, {"text": "hello"})
    site.register_callback("legacy", "Legacy", legacy_callback)
    site.register_sidebar(
        id="primary",
        name="Primary Sidebar",
        before_widget='<div id="%1$s" class="widget %2$s">',
        after_widget="</div>",
    )
    site.register_sidebar(id="footer", name="Footer")
    site.place("primary", "search-2")
    site.place("footer", "search-5")
    site.place("footer", "note-3")
    site.place("footer", "gone-9")
    return site


class Marker:
    pass


class FlagWidget(BaseWidget):
    id_base = "flag"
    name = "Flag"
    classname = ["widget_flag", Marker()]

    def render(self, args, settings, request=None):
        return "<p>flag</p>"


class TaggedPlugin(BasePlugin):
    name = "tagged"

    def get_widget_types(self):
        return [FlagWidget]

    def get_widget_callbacks(self):
        return [
            {
                "id": "tagged",
                "name": "Tagged",
                "callback": legacy_callback,
                "classname": ["tagged", Marker(), 3],
            }
        ]


def use_tagged_plugins():
    plugins = PluginRegistry()
    plugins.register(TaggedPlugin())
    return patch("core.plugins.registry", plugins)
