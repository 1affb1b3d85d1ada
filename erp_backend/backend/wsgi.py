# backend/wsgi.py
"""
WSGI entrypoint for the ERP backend.

Production deployments set DJANGO_SETTINGS_MODULE=backend.settings.prod;
anything else falls back to the dev settings module.
"""

import os

from django.core.wsgi import get_wsgi_application

if (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip() in ("", "backend.settings"):
    os.environ["DJANGO_SETTINGS_MODULE"] = "backend.settings.dev"

application = get_wsgi_application()
