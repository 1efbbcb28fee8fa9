"""
person_registry.services

Service-layer package.

Responsibilities:
- Own transaction boundaries around store operations.
- Consult the access guard before mutating a person.
"""

# Package marker.
