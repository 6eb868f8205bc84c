import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from widgets.registry import Sidebar, SiteRegistry, build_site_registry
from widgets.sidebars import resolve_sidebar


class Command(BaseCommand):
    help = "List registered sidebars and the widgets placed in them."

    def add_arguments(self, parser):
        parser.add_argument("--id", dest="sidebar", help="Limit output to a single sidebar (id, index or name).")
        parser.add_argument("--json", action="store_true", help="Emit JSON output.")

    def handle(self, *args, **options):
        key = options.get("sidebar")
        as_json = options.get("json", False)

        site = build_site_registry()
        sidebars = site.get_sidebars()
        if key:
            sidebar = resolve_sidebar(site, key)
            if sidebar is None:
                raise CommandError(f"No registered sidebar found for '{key}'.")
            sidebars = [sidebar]

        rows = [self._serialize_sidebar(site, sidebar) for sidebar in sidebars]

        if as_json:
            self.stdout.write(json.dumps(rows))
            return

        if not rows:
            self.stdout.write("No registered sidebars found.")
            return

        headers = ["ID", "NAME", "WIDGETS", "MISSING"]
        widths = {header: len(header) for header in headers}
        for row in rows:
            widths["ID"] = max(widths["ID"], len(row["id"]))
            widths["NAME"] = max(widths["NAME"], len(row["name"]))
            widths["WIDGETS"] = max(widths["WIDGETS"], len(", ".join(row["widgets"])))
            widths["MISSING"] = max(widths["MISSING"], len(", ".join(row["missing"])))

        format_str = "  ".join(f"{{{header}:<{widths[header]}}}" for header in headers)
        self.stdout.write(format_str.format(**{header: header for header in headers}))
        for row in rows:
            self.stdout.write(
                format_str.format(
                    ID=row["id"],
                    NAME=row["name"],
                    WIDGETS=", ".join(row["widgets"]),
                    MISSING=", ".join(row["missing"]),
                )
            )

    def _serialize_sidebar(self, site: SiteRegistry, sidebar: Sidebar) -> dict[str, Any]:
        placed = site.placed_widgets(sidebar.id)
        return {
            "id": sidebar.id,
            "name": sidebar.name,
            "widgets": [i for i in placed if site.get_widget(i) is not None],
            "missing": [i for i in placed if site.get_widget(i) is None],
        }
