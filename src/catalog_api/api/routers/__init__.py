"""
catalog_api.api.routers

HTTP routers: users, products and health probes.
"""
