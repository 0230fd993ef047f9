"""
URL mappings for the BPJS integration API.

Trailing slashes are omitted, matching the rest of the backend.
"""
from django.urls import path

from .views.decode import decode_payload, bpjs_health

urlpatterns = [
    path('api/bpjs/decode', decode_payload, name='bpjs_decode'),
    path('api/bpjs/health', bpjs_health, name='bpjs_health'),
]
