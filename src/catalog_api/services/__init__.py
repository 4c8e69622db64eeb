"""
catalog_api.services

Service-layer package.

Responsibilities:
- Sequence id parsing, authentication, existence, ownership and validation checks.
- Own transaction boundaries and persistence decisions.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services take raw inputs (path segment, Authorization header, body bytes) so
# the order of checks is decided here and nowhere else.
