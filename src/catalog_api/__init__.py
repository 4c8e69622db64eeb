"""
catalog_api

Top-level package for the user/product catalog API service.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "1.0.0"


# --- Module Notes -----------------------------------------------------------
# Nothing here may import the app, settings or the DB layer; tools (alembic,
# tests) import subpackages directly.
