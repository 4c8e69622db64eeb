"""
catalog_api.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services only talk to the store through `db.repositories`; swapping SQLite
# for Postgres is a `database_url` change.
