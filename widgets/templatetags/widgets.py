import logging

from django import template
from django.utils.safestring import mark_safe

register = template.Library()
logger = logging.getLogger(__name__)


@register.simple_tag(takes_context=True)
def render_sidebar(context, index) -> str:
    from widgets.registry import build_site_registry
    from widgets.rendering import render_widget
    from widgets.sidebars import resolve_sidebar

    site = build_site_registry()
    sidebar = resolve_sidebar(site, index)
    if sidebar is None:
        return ""

    request = context.get("request")
    parts = []
    for instance_id in site.placed_widgets(sidebar.id):
        try:
            result = render_widget(site, sidebar, instance_id, request=request)
        except Exception:
            logger.exception(
                "Widget %s in sidebar %s failed to render", instance_id, sidebar.id
            )
            continue
        if result is not None:
            parts.append(result[1])
    return mark_safe("".join(parts))


@register.simple_tag
def is_active_sidebar(index) -> bool:
    from widgets.registry import build_site_registry
    from widgets.sidebars import resolve_sidebar

    site = build_site_registry()
    sidebar = resolve_sidebar(site, index)
    if sidebar is None:
        return False
    return any(site.get_widget(i) is not None for i in site.placed_widgets(sidebar.id))
