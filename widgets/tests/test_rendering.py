"""Tests for widget rendering inside sidebars."""
import sys
import threading

from django.test import SimpleTestCase

from widgets.rendering import (
    capture_output,
    format_before_widget,
    get_sidebar_widgets,
    render_sidebar,
    render_sidebar_widgets,
    render_widget,
    widget_classname,
)

from .helpers import ExplodingWidget, make_site


class CaptureOutputTests(SimpleTestCase):
    def test_collects_printed_text(self):
        with capture_output() as captured:
            print("hello", end="")
        self.assertEqual(captured.getvalue(), "hello")

    def test_restores_stdout_after_exception(self):
        original = sys.stdout
        with self.assertRaises(ValueError):
            with capture_output():
                raise ValueError("bad")
        self.assertIs(sys.stdout, original)

    def test_nested_captures_are_independent(self):
        with capture_output() as outer:
            print("a", end="")
            with capture_output() as inner:
                print("b", end="")
            print("c", end="")
        self.assertEqual(inner.getvalue(), "b")
        self.assertEqual(outer.getvalue(), "ac")

    def test_concurrent_captures_restore_stdout(self):
        original = sys.stdout
        a_entered = threading.Event()
        b_entered = threading.Event()
        a_exited = threading.Event()
        results = {}
        errors = []

        def first():
            try:
                with capture_output() as captured:
                    a_entered.set()
                    b_entered.wait(5)
                    print("from a", end="")
                results["a"] = captured.getvalue()
            except Exception as exc:
                errors.append(exc)
            finally:
                a_entered.set()
                a_exited.set()

        def second():
            try:
                a_entered.wait(5)
                with capture_output() as captured:
                    b_entered.set()
                    a_exited.wait(5)
                    print("from b", end="")
                results["b"] = captured.getvalue()
            except Exception as exc:
                errors.append(exc)
            finally:
                b_entered.set()

        threads = [threading.Thread(target=first), threading.Thread(target=second)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(10)

        self.assertEqual(errors, [])
        self.assertEqual(results, {"a": "from a", "b": "from b"})
        self.assertIs(sys.stdout, original)


class WidgetClassnameTests(SimpleTestCase):
    def test_single_string(self):
        self.assertEqual(widget_classname("widget_search"), "widget_search")

    def test_list_is_underscore_joined(self):
        self.assertEqual(widget_classname(["widget", "search"]), "widget_search")

    def test_objects_use_type_name(self):
        class Marker:
            pass

        self.assertEqual(widget_classname(["widget", Marker()]), "widget_Marker")

    def test_scalars_other_than_strings_are_skipped(self):
        self.assertEqual(widget_classname(["a", 3, 1.5, True, None]), "a")
        self.assertEqual(widget_classname(7), "")

    def test_leading_separators_are_trimmed(self):
        self.assertEqual(widget_classname(["", "_x"]), "x")

    def test_empty(self):
        self.assertEqual(widget_classname(""), "")


class FormatBeforeWidgetTests(SimpleTestCase):
    def test_numbered_placeholders(self):
        self.assertEqual(
            format_before_widget('<li id="%1$s" class="widget %2$s">', "search-2", "widget_search"),
            '<li id="search-2" class="widget widget_search">',
        )

    def test_sequential_placeholders(self):
        self.assertEqual(
            format_before_widget('<div id="%s" class="%s">', "text-2", "widget_text"),
            '<div id="text-2" class="widget_text">',
        )

    def test_reordered_numbered_placeholders(self):
        self.assertEqual(format_before_widget("%2$s/%1$s", "a", "b"), "b/a")

    def test_template_without_placeholders(self):
        self.assertEqual(format_before_widget("<div>", "a", "b"), "<div>")

    def test_literal_percent(self):
        self.assertEqual(format_before_widget("100%% %s", "a", "b"), "100% a")


class RenderWidgetTests(SimpleTestCase):
    def setUp(self):
        self.site = make_site()
        self.primary = self.site.get_sidebar("primary")

    def test_unregistered_instance_returns_none(self):
        self.assertIsNone(render_widget(self.site, self.primary, "gone-9"))

    def test_record_and_wrapped_markup(self):
        record, wrapped = render_widget(self.site, self.primary, "search-2")
        self.assertEqual(record["instance_id"], "search-2")
        self.assertEqual(record["base_id"], "search")
        self.assertEqual(record["option_name"], "widget_search")
        self.assertEqual(record["rendered"], "<div>search box</div>")
        self.assertEqual(
            wrapped,
            '<div id="search-2" class="widget widget_search"><div>search box</div></div>',
        )

    def test_internal_fields_are_stripped(self):
        record, _ = render_widget(self.site, self.primary, "search-2")
        for key in ("id", "callback", "params"):
            self.assertNotIn(key, record)

    def test_render_receives_display_args_and_settings(self):
        seen = {}

        def spy(args, settings):
            seen.update(args=args, settings=settings)
            return "ok"

        self.site.register_callback("spy", "Spy", spy, settings={"k": "v"})
        record, _ = render_widget(self.site, self.primary, "spy")
        self.assertEqual(record["rendered"], "ok")
        self.assertEqual(seen["settings"], {"k": "v"})
        self.assertEqual(seen["args"]["widget_id"], "spy")
        self.assertEqual(seen["args"]["widget_name"], "Spy")
        self.assertEqual(seen["args"]["before_widget"], '<div id="spy" class="widget widget_spy">')
        self.assertEqual(seen["args"]["after_widget"], "</div>")

    def test_display_args_are_layout_templates_and_widget_identity(self):
        seen = {}

        def spy(args, settings):
            seen.update(args)

        self.site.register_callback("spy", "Spy", spy)
        render_widget(self.site, self.primary, "spy")
        self.assertEqual(
            set(seen),
            {"before_widget", "after_widget", "before_title", "after_title", "widget_id", "widget_name"},
        )
        self.assertEqual(seen["before_title"], self.primary.before_title)

    def test_printed_and_returned_output_are_combined(self):
        def both(args, settings):
            print("<b>", end="")
            return "</b>"

        self.site.register_callback("both", "Both", both)
        record, _ = render_widget(self.site, self.primary, "both")
        self.assertEqual(record["rendered"], "<b></b>")

    def test_exception_propagates_and_stdout_is_restored(self):
        self.site.register_widget(ExplodingWidget, 1)
        original = sys.stdout
        with self.assertRaises(RuntimeError):
            render_widget(self.site, self.primary, "boom-1")
        self.assertIs(sys.stdout, original)

    def test_callback_widget_has_no_option_name(self):
        record, _ = render_widget(self.site, self.primary, "legacy")
        self.assertEqual(record["rendered"], "<em>legacy</em>")
        self.assertNotIn("option_name", record)


class SidebarWidgetsTests(SimpleTestCase):
    def setUp(self):
        self.site = make_site()

    def test_placement_order_and_missing_instances_skipped(self):
        widgets = get_sidebar_widgets(self.site, "footer")
        self.assertEqual([w["instance_id"] for w in widgets], ["search-5", "note-3"])

    def test_order_is_not_alphabetical(self):
        self.site.place("primary", "note-3")
        self.site.place("primary", "legacy")
        widgets = get_sidebar_widgets(self.site, "primary")
        self.assertEqual([w["instance_id"] for w in widgets], ["search-2", "note-3", "legacy"])

    def test_unknown_sidebar_renders_nothing(self):
        self.assertEqual(render_sidebar_widgets(self.site, "nope"), ([], ""))

    def test_sidebar_html_wraps_each_widget(self):
        html = render_sidebar(self.site, "footer")
        self.assertEqual(
            html,
            '<li id="search-5" class="widget widget_search"><div>search box</div></li>\n'
            '<li id="note-3" class="widget widget_note"><p>hello</p></li>\n',
        )

    def test_each_widget_renders_once(self):
        calls = []

        def counted(args, settings):
            calls.append(args["widget_id"])
            return "x"

        self.site.register_callback("counted", "Counted", counted)
        self.site.place("primary", "counted")
        widgets, html = render_sidebar_widgets(self.site, "primary")
        self.assertEqual(calls, ["counted"])
        self.assertEqual(len(widgets), 2)
        self.assertIn('<div id="counted" class="widget widget_counted">x</div>', html)
