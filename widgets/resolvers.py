from __future__ import annotations

import re

from core.plugins import BaseWidget

from .registry import RegisteredWidget, SiteRegistry
from .rendering import STRIPPED_FIELDS, classname_json


def _widget_type_record(registry: SiteRegistry, entry: RegisteredWidget) -> dict:
    widget = entry.widget
    record = entry.as_dict()
    record["name"] = widget.name
    record["id_base"] = widget.id_base
    record["option_name"] = widget.option_name
    record["classname"] = classname_json(entry.classname)
    record["instances"] = 0
    record["sidebars"] = {}

    # Substring match on "{id_base}-<digit>"; an instance of "foo-bar" also
    # counts for "bar".
    pattern = re.compile(rf"({re.escape(widget.id_base)}-\d)")
    for sidebar_id, instance_ids in registry.sidebars_widgets().items():
        for instance_id in instance_ids:
            if pattern.search(instance_id):
                record["sidebars"].setdefault(sidebar_id, []).append(instance_id)
                record["instances"] += 1

    for key in STRIPPED_FIELDS:
        record.pop(key, None)
    return record


def list_widget_types(registry: SiteRegistry) -> list[dict]:
    """One record per distinct widget type, in registration order."""
    types = []
    seen = set()
    for entry in registry.get_widgets():
        if not entry.is_object or entry.id_base in seen:
            continue
        seen.add(entry.id_base)
        types.append(_widget_type_record(registry, entry))
    return types


def get_widget_type(registry: SiteRegistry, id_base: str) -> dict | None:
    for entry in registry.get_widgets():
        if entry.is_object and entry.id_base == id_base:
            return _widget_type_record(registry, entry)
    return None


def get_widget_instance(registry: SiteRegistry, instance_id: str) -> BaseWidget | None:
    entry = registry.get_widget(instance_id)
    if entry is None or not entry.is_object:
        return None
    return entry.widget


def widget_object_json(widget: BaseWidget) -> dict:
    return {
        "id_base": widget.id_base,
        "name": widget.name,
        "option_name": widget.option_name,
        "widget_options": {
            **widget.widget_options,
            "classname": classname_json(widget.widget_options["classname"]),
        },
        "control_options": dict(widget.control_options),
        "number": widget.number,
        "id": widget.id,
    }
