"""
storehub.db.repositories

Repository package (the credential and tenant store).

Responsibilities:
- Group data-access repositories for entities, users, stores and sellers.
- Apply the liveness predicate uniformly so callers never inspect deleted_at.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories are intentionally thin; business rules belong in services.
