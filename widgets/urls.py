from django.urls import re_path

from .views import (
    SidebarDetailView,
    SidebarListView,
    WidgetDetailView,
    WidgetInstanceView,
    WidgetListView,
)

urlpatterns = [
    re_path(r"^sidebars/?$", SidebarListView.as_view(), name="sidebar-list"),
    re_path(r"^sidebars/(?P<id>[\w-]+)/?$", SidebarDetailView.as_view(), name="sidebar-detail"),
    re_path(r"^widgets/?$", WidgetListView.as_view(), name="widget-list"),
    re_path(r"^widgets/(?P<id_base>[\w-]+)/?$", WidgetDetailView.as_view(), name="widget-detail"),
    re_path(
        r"^widgets/(?P<id_base>[\w-]+)/(?P<instance_id>[\w-]+)/?$",
        WidgetInstanceView.as_view(),
        name="widget-instance",
    ),
]
