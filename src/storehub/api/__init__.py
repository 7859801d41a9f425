"""
storehub.api

HTTP boundary around the auth core and services.

Responsibilities:
- App factory, routers and request/response models.
- Turning `storehub.errors` into HTTP status codes.
"""


# --- Module Notes -----------------------------------------------------------
# Routers validate, authenticate, run access checks, then delegate.
