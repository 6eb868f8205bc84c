import json
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, override_settings

from core.plugins import BasePlugin, BaseWidget, PluginRegistry


class _Clock(BaseWidget):
    id_base = "clock"
    name = "Clock"

    def render(self, args, settings, request=None):
        return "12:00"


class _ClockPlugin(BasePlugin):
    name = "clock"

    def get_widget_types(self):
        return [_Clock]

    def get_widget_callbacks(self):
        return [{"id": "tick", "name": "Tick", "callback": lambda args, settings: "tick"}]


class BaseWidgetTests(SimpleTestCase):
    def test_instance_identity(self):
        widget = _Clock(4)
        self.assertEqual(widget.number, 4)
        self.assertEqual(widget.id, "clock-4")
        self.assertEqual(widget.option_name, "widget_clock")

    def test_unnumbered_widget_has_no_id(self):
        self.assertIsNone(_Clock().id)

    def test_default_widget_options(self):
        self.assertEqual(_Clock().widget_options, {"classname": "widget_clock", "description": ""})


class PluginRegistryTests(SimpleTestCase):
    def setUp(self):
        self.registry = PluginRegistry()
        self.registry.register(_ClockPlugin())

    def test_widget_type_lookup(self):
        self.assertIs(self.registry.get_widget_type("clock"), _Clock)
        self.assertIsNone(self.registry.get_widget_type("calendar"))

    def test_widget_callbacks(self):
        self.assertEqual([c["id"] for c in self.registry.get_widget_callbacks()], ["tick"])


@override_settings(
    SIDEBARS=[
        {"id": "primary", "name": "Primary Sidebar", "widgets": ["clock-1", "clock-9"]},
        {"id": "footer", "name": "Footer"},
    ],
    WIDGET_INSTANCES={"clock": {1: {}}},
)
class SidebarListCommandTests(SimpleTestCase):
    def setUp(self):
        plugins = PluginRegistry()
        plugins.register(_ClockPlugin())
        patcher = patch("core.plugins.registry", plugins)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _call(self, *args):
        out = StringIO()
        call_command("sidebar_list", *args, stdout=out)
        return out.getvalue()

    def test_json_output(self):
        rows = json.loads(self._call("--json"))
        self.assertEqual(
            rows,
            [
                {"id": "primary", "name": "Primary Sidebar", "widgets": ["clock-1"], "missing": ["clock-9"]},
                {"id": "footer", "name": "Footer", "widgets": [], "missing": []},
            ],
        )

    def test_table_output(self):
        output = self._call()
        lines = output.splitlines()
        self.assertTrue(lines[0].startswith("ID"))
        self.assertIn("primary", lines[1])
        self.assertIn("clock-9", lines[1])

    def test_single_sidebar_by_name(self):
        rows = json.loads(self._call("--id", "Footer", "--json"))
        self.assertEqual([row["id"] for row in rows], ["footer"])

    def test_unknown_sidebar(self):
        with self.assertRaises(CommandError):
            self._call("--id", "nope")

    @override_settings(SIDEBARS=[])
    def test_no_sidebars(self):
        self.assertIn("No registered sidebars found.", self._call())
