"""
Recipe Service API
Routers and endpoint modules
"""
