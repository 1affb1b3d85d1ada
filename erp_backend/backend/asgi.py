# backend/asgi.py
"""
PATH: backend/asgi.py

ASGI entrypoint for the ERP backend (same settings selection as wsgi.py).
"""

import os

from django.core.asgi import get_asgi_application

if (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip() in ("", "backend.settings"):
    os.environ["DJANGO_SETTINGS_MODULE"] = "backend.settings.dev"

application = get_asgi_application()
