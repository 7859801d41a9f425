"""
storehub

Multi-tenant backend: entities (tenants) own users and stores, stores own
sellers, and every call is authenticated with a bearer token scoped to one
entity.
"""

__version__ = "0.1.0"
