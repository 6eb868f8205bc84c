from django.conf import settings
from django.urls import path, include

urlpatterns = [
    path(settings.REST_URL_PREFIX, include("widgets.urls")),
]
