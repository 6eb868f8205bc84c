from __future__ import annotations

import io
import logging
import re
import sys
import threading
from contextlib import contextmanager

from .registry import RegisteredWidget, Sidebar, SiteRegistry

logger = logging.getLogger(__name__)

STRIPPED_FIELDS = ("id", "callback", "params")

_PLACEHOLDER_RE = re.compile(r"%(?:(\d+)\$)?s|%%")
_SCALARS = (str, int, float, bool)


class _StdoutRouter:
    """Sends writes to the calling thread's innermost capture buffer.

    Threads with no active capture write to the stream it replaced.
    """

    def __init__(self, fallback):
        self.fallback = fallback
        self.local = threading.local()

    def buffers(self) -> list:
        buffers = getattr(self.local, "buffers", None)
        if buffers is None:
            buffers = self.local.buffers = []
        return buffers

    def _stream(self):
        buffers = getattr(self.local, "buffers", None)
        return buffers[-1] if buffers else self.fallback

    def write(self, text: str) -> int:
        return self._stream().write(text)

    def flush(self) -> None:
        self._stream().flush()

    def __getattr__(self, name):
        return getattr(self._stream(), name)


_router_lock = threading.Lock()
_router: _StdoutRouter | None = None
_router_users = 0


@contextmanager
def capture_output():
    """Collect everything the current thread writes to stdout inside the block.

    The router is installed while any capture is active and stdout is put
    back when the last one exits, whether or not it raised.
    """
    global _router, _router_users
    buffer = io.StringIO()
    with _router_lock:
        if _router is None:
            _router = _StdoutRouter(sys.stdout)
            sys.stdout = _router
        _router_users += 1
        router = _router
    buffers = router.buffers()
    buffers.append(buffer)
    try:
        yield buffer
    finally:
        buffers.pop()
        with _router_lock:
            _router_users -= 1
            if _router_users == 0:
                if sys.stdout is router:
                    sys.stdout = router.fallback
                _router = None


def _identifiers(classname) -> list:
    if isinstance(classname, (list, tuple)):
        return list(classname)
    return [classname]


def widget_classname(classname) -> str:
    joined = ""
    for item in _identifiers(classname):
        if isinstance(item, str):
            joined += f"_{item}"
        elif item is not None and not isinstance(item, _SCALARS):
            joined += f"_{type(item).__name__}"
    return joined.lstrip("_")


def classname_json(classname):
    """``classname`` with object identifiers replaced by their type name."""
    if isinstance(classname, (list, tuple)):
        return [classname_json(item) for item in classname]
    if classname is None or isinstance(classname, _SCALARS):
        return classname
    return type(classname).__name__


def format_before_widget(template: str, widget_id: str, classname: str) -> str:
    """Substitute the widget id and class name into a ``before_widget`` template.

    Accepts numbered (``%1$s``) or sequential (``%s``) placeholders.
    """
    values = (widget_id, classname)
    position = 0

    def replace(match):
        nonlocal position
        if match.group(0) == "%%":
            return "%"
        if match.group(1):
            index = int(match.group(1)) - 1
        else:
            index = position
            position += 1
        return values[index] if 0 <= index < len(values) else ""

    return _PLACEHOLDER_RE.sub(replace, template or "")


def _display_args(sidebar: Sidebar, entry: RegisteredWidget) -> dict:
    args = sidebar.layout_args()
    args.update({"widget_id": entry.id, "widget_name": entry.name})
    args["before_widget"] = format_before_widget(
        sidebar.before_widget, entry.id, widget_classname(entry.classname)
    )
    return args


def _call_widget(entry: RegisteredWidget, args: dict, request=None) -> str:
    with capture_output() as captured:
        if entry.is_object:
            returned = entry.callback(args, dict(entry.settings), request=request)
        else:
            returned = entry.callback(args, dict(entry.settings))
    output = captured.getvalue()
    if isinstance(returned, str):
        output += returned
    return output


def _widget_record(entry: RegisteredWidget, rendered: str) -> dict:
    record = entry.as_dict()
    for key in STRIPPED_FIELDS:
        record.pop(key, None)
    record["instance_id"] = entry.id
    record["classname"] = classname_json(entry.classname)
    record["base_id"] = entry.id_base
    if entry.widget is not None:
        record["option_name"] = entry.widget.option_name
    record["rendered"] = rendered
    return record


def render_widget(registry: SiteRegistry, sidebar: Sidebar, instance_id: str, request=None) -> tuple[dict, str] | None:
    """Render one placed instance.

    Returns the instance record and the instance wrapped in the sidebar's
    ``before_widget``/``after_widget`` markup, or ``None`` when the instance
    is not registered.
    """
    entry = registry.get_widget(instance_id)
    if entry is None:
        return None
    args = _display_args(sidebar, entry)
    logger.debug("Rendering widget %s in sidebar %s", instance_id, sidebar.id)
    rendered = _call_widget(entry, args, request=request)
    wrapped = f"{args['before_widget']}{rendered}{sidebar.after_widget}"
    return _widget_record(entry, rendered), wrapped


def render_sidebar_widgets(registry: SiteRegistry, sidebar_id: str, request=None) -> tuple[list[dict], str]:
    """Render every placed widget once, returning the records and the sidebar HTML."""
    sidebar = registry.get_sidebar(sidebar_id)
    if sidebar is None:
        return [], ""
    widgets = []
    parts = []
    for instance_id in registry.placed_widgets(sidebar_id):
        result = render_widget(registry, sidebar, instance_id, request=request)
        if result is None:
            continue
        record, wrapped = result
        widgets.append(record)
        parts.append(wrapped)
    return widgets, "".join(parts)


def get_sidebar_widgets(registry: SiteRegistry, sidebar_id: str, request=None) -> list[dict]:
    return render_sidebar_widgets(registry, sidebar_id, request=request)[0]


def render_sidebar(registry: SiteRegistry, sidebar_id: str, request=None) -> str:
    return render_sidebar_widgets(registry, sidebar_id, request=request)[1]
