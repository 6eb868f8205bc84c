from __future__ import annotations

import json
import logging

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .registry import build_site_registry

logger = logging.getLogger(__name__)


def rest_response(data, status: int = 200) -> JsonResponse:
    return JsonResponse(data, status=status, safe=False)


def rest_error(code: str, message: str, status: int, **data) -> JsonResponse:
    return JsonResponse(
        {"code": code, "message": message, "data": {"status": status, **data}},
        status=status,
    )


def ensure_request(request, method_name: str) -> None:
    if not isinstance(request, HttpRequest):
        raise TypeError(f"{method_name} expects an instance of HttpRequest")


def _body_params(request) -> dict:
    if request.method in ("GET", "HEAD"):
        return {}
    if request.content_type and "json" in request.content_type:
        try:
            raw = json.loads(request.body or "{}")
        except json.JSONDecodeError:
            return {}
        return raw if isinstance(raw, dict) else {}
    return {key: request.POST.get(key) for key in request.POST.keys()}


def collect_params(request, url_kwargs: dict) -> dict:
    """URL kwargs win over body values, which win over the query string."""
    params = {key: request.GET.get(key) for key in request.GET.keys()}
    params.update(_body_params(request))
    params.update(url_kwargs)
    return params


@method_decorator(csrf_exempt, name="dispatch")
class RestView(View):
    """Class-based endpoint with per-method argument validation.

    ``endpoint_args`` maps an upper-case HTTP method to ``{name: {"description": str,
    "type": str, "validate": callable(site, value) -> bool}}``. A request whose
    present arguments fail validation is answered with 400 before the handler
    runs.
    """

    endpoint_args: dict[str, dict[str, dict]] = {}

    def dispatch(self, request, *args, **kwargs):
        self.site = build_site_registry()
        self.params = collect_params(request, kwargs)

        invalid = {}
        for name, spec in self.endpoint_args.get(request.method.upper(), {}).items():
            if name not in self.params:
                continue
            validate = spec.get("validate")
            if validate is not None and not validate(self.site, self.params[name]):
                invalid[name] = "Invalid parameter."

        if invalid:
            logger.info(
                "Rejected %s %s: invalid %s",
                request.method,
                request.path,
                ", ".join(invalid),
            )
            return rest_error(
                "rest_invalid_param",
                f"Invalid parameter(s): {', '.join(invalid)}",
                400,
                params=invalid,
            )
        return super().dispatch(request, *args, **kwargs)

    def get_param(self, name: str, default=None):
        return self.params.get(name, default)
