"""
person_registry.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM records, engine/session setup, mapping, and repositories.
"""

# Package marker.
