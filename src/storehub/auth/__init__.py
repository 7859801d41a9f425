"""
storehub.auth

Authentication/authorization core.

Responsibilities:
- Password hashing (bcrypt) and bearer token codec (JWT).
- Authenticated identity type (`Principal`) and the closed role enumeration.
- Tenant-scoped access checks (`AccessGuard`) and FastAPI auth dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package reads process settings; config objects are injected.
