"""
catalog_api.api

API package for the catalog service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and error-to-response mapping.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: it hands raw request parts to services and frames
# their results/errors as HTTP responses.
