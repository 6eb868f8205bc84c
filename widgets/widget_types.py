from __future__ import annotations

import logging

import markdown
from django.template.loader import render_to_string

from core.plugins import BaseWidget

logger = logging.getLogger(__name__)


class TextWidget(BaseWidget):
    id_base = "text"
    name = "Text"
    description = "Arbitrary text written in Markdown."
    template_name = "widgets/text_widget.html"

    def render(self, args: dict, settings: dict, request=None) -> str:
        md = markdown.Markdown(extensions=["fenced_code"])
        content_html = md.convert(settings.get("content", ""))
        return render_to_string(
            self.template_name,
            {"args": args, "title": settings.get("title", ""), "content_html": content_html},
            request=request,
        )


class SearchWidget(BaseWidget):
    id_base = "search"
    name = "Search"
    description = "A search form for your site."
    template_name = "widgets/search_widget.html"

    def render(self, args: dict, settings: dict, request=None) -> str:
        query = request.GET.get("q", "") if request is not None else ""
        return render_to_string(
            self.template_name,
            {
                "args": args,
                "title": settings.get("title", ""),
                "action": settings.get("action") or "/search/",
                "query": query,
            },
            request=request,
        )


class CustomHTMLWidget(BaseWidget):
    id_base = "custom_html"
    name = "Custom HTML"
    description = "Arbitrary HTML code."
    classname = "widget_text"
    template_name = "widgets/custom_html_widget.html"

    def render(self, args: dict, settings: dict, request=None) -> str:
        return render_to_string(
            self.template_name,
            {"args": args, "title": settings.get("title", ""), "content": settings.get("content", "")},
            request=request,
        )


def meta_widget(args: dict, settings: dict) -> str:
    title = settings.get("title") or "Meta"
    logger.debug("Rendering meta widget %s", args.get("widget_id"))
    return (
        f"{args.get('before_title', '')}{title}{args.get('after_title', '')}"
        '<ul><li><a href="/feed/">Entries feed</a></li></ul>'
    )
