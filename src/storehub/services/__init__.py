"""
storehub.services

Use-case layer: one class per aggregate (auth, users, stores, sellers), built
per request on the request's session. Each write ends in an explicit commit.
"""
