"""
URL configuration for the hospital BPJS integration backend.

Routes the BPJS operator API and exposes OpenAPI documentation at
``/swagger/`` and ``/redoc/``.
"""
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

api_info = openapi.Info(
    title="Hospital BPJS Integration API",
    default_version='v1',
    description="Decoding and diagnostics for BPJS Kesehatan partner payloads.",
)

schema_view = get_schema_view(
    api_info,
    public=False,
    permission_classes=(permissions.IsAdminUser,),
)

urlpatterns = [
    path('', include('bpjs.routers')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
