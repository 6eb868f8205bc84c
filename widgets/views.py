from .rendering import render_sidebar_widgets
from .resolvers import (
    get_widget_instance,
    get_widget_type,
    list_widget_types,
    widget_object_json,
)
from .rest import RestView, ensure_request, rest_error, rest_response
from .sidebars import resolve_sidebar, sidebar_exists


def _widget_type_exists(site, id_base) -> bool:
    return get_widget_type(site, id_base) is not None


def _widget_instance_exists(site, instance_id) -> bool:
    return get_widget_instance(site, instance_id) is not None


SIDEBAR_ARG = {
    "description": "A sidebar id",
    "type": "string",
    "validate": sidebar_exists,
}
ID_BASE_ARG = {
    "description": "The base id of a registered widget",
    "type": "string",
    "validate": _widget_type_exists,
}
INSTANCE_ID_ARG = {
    "description": "The instance id of a widget",
    "type": "string",
    "validate": _widget_instance_exists,
}


def _sidebar_json(site, sidebar, request) -> dict:
    data = sidebar.as_dict()
    data["widgets"], data["rendered"] = render_sidebar_widgets(site, sidebar.id, request=request)
    return data


class SidebarListView(RestView):
    def get(self, request, **kwargs):
        ensure_request(request, "SidebarListView.get")
        sidebars = [_sidebar_json(self.site, sidebar, request) for sidebar in self.site.get_sidebars()]
        return rest_response(sidebars)


class SidebarDetailView(RestView):
    endpoint_args = {"GET": {"id": SIDEBAR_ARG}}

    def get(self, request, **kwargs):
        ensure_request(request, "SidebarDetailView.get")
        sidebar = resolve_sidebar(self.site, self.get_param("id"))
        return rest_response(_sidebar_json(self.site, sidebar, request))


class WidgetListView(RestView):
    def get(self, request, **kwargs):
        ensure_request(request, "WidgetListView.get")
        return rest_response(list_widget_types(self.site))


class WidgetDetailView(RestView):
    endpoint_args = {
        "GET": {"id_base": ID_BASE_ARG},
        "POST": {"sidebar": SIDEBAR_ARG},
    }

    def get(self, request, **kwargs):
        ensure_request(request, "WidgetDetailView.get")
        return rest_response(get_widget_type(self.site, self.get_param("id_base")))

    def post(self, request, **kwargs):
        ensure_request(request, "WidgetDetailView.post")
        return rest_error("rest_not_implemented", "Creating widgets is not supported.", 501)


class WidgetInstanceView(RestView):
    endpoint_args = {"GET": {"id_base": ID_BASE_ARG, "instance_id": INSTANCE_ID_ARG}}

    def get(self, request, **kwargs):
        ensure_request(request, "WidgetInstanceView.get")
        widget = get_widget_instance(self.site, self.get_param("instance_id"))
        return rest_response(widget_object_json(widget))
