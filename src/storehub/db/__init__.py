"""
storehub.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories (the credential
  and tenant store consumed by the auth core).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The auth core only sees repositories; swapping DB backends stays local here.
