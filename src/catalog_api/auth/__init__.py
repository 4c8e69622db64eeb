"""
catalog_api.auth

Authentication/authorization package.

Responsibilities:
- Password hashing (bcrypt).
- HTTP Basic credential parsing and verification against stored users.
- Ownership checks for owned resources.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# There are no sessions or tokens: credentials are verified on every request.
