from core.plugins import BasePlugin


class WidgetsPlugin(BasePlugin):
    name = "widgets"
    label = "Widgets"
    description = "Built-in widget types for the site's sidebars."

    def get_widget_types(self):
        from .widget_types import CustomHTMLWidget, SearchWidget, TextWidget
        return [TextWidget, SearchWidget, CustomHTMLWidget]

    def get_widget_callbacks(self):
        from .widget_types import meta_widget
        return [
            {
                "id": "meta",
                "name": "Meta",
                "callback": meta_widget,
                "description": "Links to the site's feeds.",
            }
        ]
