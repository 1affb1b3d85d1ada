# backend/settings/__init__.py
"""
Settings package. Nothing is loaded here; select a module explicitly:
- backend.settings.dev   (local development, tests)
- backend.settings.prod  (production)
"""
