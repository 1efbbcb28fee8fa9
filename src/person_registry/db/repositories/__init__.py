"""
person_registry.db.repositories

Repository package.

Responsibilities:
- Group data-access stores for the Person aggregate.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Stores never commit; transaction boundaries belong to the service layer.
