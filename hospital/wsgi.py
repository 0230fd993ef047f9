"""
WSGI entry point for the hospital BPJS integration backend.

Exposes ``application`` for WSGI servers such as gunicorn.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "hospital.settings")

application = get_wsgi_application()
