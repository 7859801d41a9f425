"""
storehub.api.routers

HTTP routers: health probes, auth, users, stores, sellers.
"""
